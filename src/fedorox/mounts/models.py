from typing import List
from pydantic import BaseModel, SecretStr, field_validator

class MountSpec(BaseModel):
    source: str
    mount_point: str
    filesystem_type: str
    options: List[str] = []
    persistent_entry: bool = True

    @field_validator("options")
    @classmethod
    def dedupe_options(cls, v: List[str]) -> List[str]:
        # ordered set: first occurrence wins
        return list(dict.fromkeys(opt.strip() for opt in v if opt.strip()))

    @property
    def options_string(self) -> str:
        return ",".join(self.options) or "defaults"

    def fstab_line(self) -> str:
        return f"{self.source} {self.mount_point} {self.filesystem_type} {self.options_string} 0 0"

class CredentialsFile(BaseModel):
    path: str = "/etc/cifs-credentials"
    mode: int = 0o600
    username: str
    password: SecretStr

    def render(self) -> str:
        return f"username={self.username}\npassword={self.password.get_secret_value()}\n"
