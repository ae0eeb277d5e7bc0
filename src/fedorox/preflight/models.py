from pydantic import BaseModel

class SubvolumeCheckResult(BaseModel):
    path: str
    is_subvolume: bool
