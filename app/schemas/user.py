from pydantic import BaseModel


class CurrentUser(BaseModel):
    """Identity taken from the bearer token's ``sub`` claim."""
    id: str
