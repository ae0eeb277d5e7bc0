import os

from fedorox.mounts.models import CredentialsFile


def write_credentials(credentials: CredentialsFile):
    """Overwrite the credentials file, readable by its owner only."""
    parent = os.path.dirname(credentials.path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    fd = os.open(credentials.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, credentials.mode)
    with os.fdopen(fd, "w") as f:
        # an existing file keeps its old bits through O_CREAT
        os.fchmod(f.fileno(), credentials.mode)
        f.write(credentials.render())
