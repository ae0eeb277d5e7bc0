from abc import ABC, abstractmethod

from fedorox.snapshots.models import SnapshotSubject


class SnapshotService(ABC):
    @abstractmethod
    def config_exists(self, subject: SnapshotSubject) -> bool:
        pass

    @abstractmethod
    def create_config(self, subject: SnapshotSubject, path: str):
        pass

    @abstractmethod
    def create(self, subject: SnapshotSubject, description: str):
        pass
