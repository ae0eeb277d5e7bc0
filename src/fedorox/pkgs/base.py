from abc import ABC, abstractmethod


class PackageManager(ABC):
    @abstractmethod
    def install(self, *packages: str):
        pass

    @abstractmethod
    def is_installed(self, package: str) -> bool:
        pass

    @abstractmethod
    def upgrade(self):
        pass

    @abstractmethod
    def clean(self):
        pass
