from pydantic import BaseModel


class SessionInfo(BaseModel):
    """Verified claims carried by a session cookie."""
    user_id: str
