"""
Core Layer
- Purpose: Encapsulate the heart of the application's business logic and domain models
- Key Directories:
    - entities
    - exceptions
    - interface
    - service
    - usecase
"""
