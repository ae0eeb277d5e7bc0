from typing import Optional
from pydantic import BaseModel

class OSInfo(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    version_id: Optional[str] = None
    pretty_name: Optional[str] = None

class SystemCheck(BaseModel):
    is_root: bool
    is_target_distro: bool
    os: OSInfo
