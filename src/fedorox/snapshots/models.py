from enum import Enum
from datetime import datetime
from pydantic import BaseModel

class SnapshotSubject(str, Enum):
    ROOT = "root"
    HOME = "home"

class SnapshotConfig(BaseModel):
    subject: SnapshotSubject
    backing_path: str
    config_exists: bool = False

class Snapshot(BaseModel):
    subject: SnapshotSubject
    description: str
    created_at: datetime
