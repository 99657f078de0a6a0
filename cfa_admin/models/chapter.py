from dataclasses import dataclass


@dataclass
class Chapter:
    code: str
    name: str
    enabled: bool = True
    weight: int = 0
