from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """Credential store adapter - hashes and verifies passwords, stateless"""

    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        pass

    @abstractmethod
    def dummy_verify(self) -> None:
        """Spend the same time as verify() when there is no hash to check"""
        pass
