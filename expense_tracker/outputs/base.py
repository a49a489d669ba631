from abc import ABC, abstractmethod

class BaseOutput(ABC):
    @abstractmethod
    def write(self, records):
        """Write records to the chosen sink."""
        pass
