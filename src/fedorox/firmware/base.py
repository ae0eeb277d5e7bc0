from abc import ABC, abstractmethod


class FirmwareService(ABC):
    @abstractmethod
    def refresh(self):
        pass

    @abstractmethod
    def has_updates(self) -> bool:
        pass

    @abstractmethod
    def update(self):
        pass
