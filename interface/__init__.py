"""
Interface Layer
- Purpose: Expose the use cases over HTTP
- Key Directories:
    - di
    - middleware
    - routers
    - schemas
"""
