from abc import ABC, abstractmethod


class DiscoveryExtractor(ABC):
    @abstractmethod
    def process_file(self, file_path: str, rel_path: str):
        pass

    @abstractmethod
    def extract_from_source(self, src: bytes, rel_path: str):
        pass
