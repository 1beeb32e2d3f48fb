from pydantic import BaseModel

class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str

class ErrorResponse(BaseModel):
    """Body of every error response."""
    error: str
