from dataclasses import dataclass


@dataclass(frozen=True)
class StatusStyle:
    color: str  # "red" | "green" | "blue" | "yellow" | "gray"
    label: str
    icon: str = ""

    @property
    def tile_class(self) -> str:
        return f"{self.color}-tile"

    @property
    def row_class(self) -> str:
        return f"row-{self.color}"
