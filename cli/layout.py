"""Pydantic schemas for bench host layout files."""

from pathlib import Path
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class BlockEntry(BaseModel):
    """One block on a grid."""
    name: str
    type: Literal["program", "panel", "terminal"] = "panel"
    surfaces: List[str] = Field(default_factory=lambda: [""])
    custom_data: str = ""
    custom_data_file: Optional[str] = None
    running: bool = True


class GridEntry(BaseModel):
    """A grid: blocks sharing one block registry."""
    name: str
    blocks: List[BlockEntry] = Field(default_factory=list)

    @field_validator("blocks")
    @classmethod
    def block_names_unique(cls, blocks: List[BlockEntry]) -> List[BlockEntry]:
        seen = set()
        for block in blocks:
            if block.name in seen:
                raise ValueError(f"duplicate block name: {block.name}")
            seen.add(block.name)
        return blocks


class HostLayout(BaseModel):
    """Every grid attached to the shared broadcast channel."""
    grids: List[GridEntry]


def load_layout(path: Path) -> HostLayout:
    """
    Load and validate a host layout JSON file.

    `custom_data_file` entries are read relative to the layout file and
    replace `custom_data`.

    Args:
        path: Path to the layout file

    Returns:
        HostLayout

    Raises:
        pydantic.ValidationError: If the layout does not match the schema
        OSError: If a file cannot be read
    """
    layout = HostLayout.model_validate_json(path.read_text())

    for grid in layout.grids:
        for block in grid.blocks:
            if block.custom_data_file:
                block.custom_data = (path.parent / block.custom_data_file).read_text()

    return layout
