from abc import ABC, abstractmethod

from fedorox.mounts.models import MountSpec


class MountController(ABC):
    @abstractmethod
    def is_mounted(self, spec: MountSpec) -> bool:
        pass

    @abstractmethod
    def mount(self, spec: MountSpec):
        pass

    @abstractmethod
    def reload(self):
        """Make the service manager re-read the persistent mount table."""
        pass
