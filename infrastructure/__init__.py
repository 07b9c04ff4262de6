"""
Infrastructure Layer
- Concrete implementations of the core interfaces
- MongoDB repositories, JWT authentication, Redis cache, chatbot client and file storage
- FastAPI dependency providers in infrastructure.di
"""
