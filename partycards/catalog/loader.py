"""
Catalog Loader - Reads card packs from JSON.

File format (list of packs):

    [
      {
        "name": "Base",
        "white": [{"text": "...", "pack": "Base"}],
        "black": [{"text": "...", "pack": "Base"}]
      }
    ]

"white" holds response cards and "black" holds prompt cards.
"response" and "prompt" are accepted as aliases. Cards without a
"pack" field inherit the pack name.

The catalog is read once and never changes afterwards.
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..engine_core.state import Card
from ..errors import CatalogError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "starter.json"


@dataclass(frozen=True)
class Pack:
    """A named bundle of prompt and response cards."""
    name: str
    prompts: tuple[Card, ...] = ()
    responses: tuple[Card, ...] = ()


@dataclass(frozen=True)
class Catalog:
    """All packs available to new games, in file order."""
    packs: tuple[Pack, ...] = ()

    @property
    def prompt_count(self) -> int:
        return sum(len(p.prompts) for p in self.packs)

    @property
    def response_count(self) -> int:
        return sum(len(p.responses) for p in self.packs)

    def pack_names(self) -> list[str]:
        return [p.name for p in self.packs]

    def only(self, names: list[str]) -> Catalog:
        """Return a catalog restricted to the named packs."""
        wanted = set(names)
        return Catalog(packs=tuple(p for p in self.packs if p.name in wanted))

    @classmethod
    def from_data(cls, data: Any) -> Catalog:
        if not isinstance(data, list):
            raise CatalogError("Catalog must be a list of packs")

        packs = []
        for i, raw in enumerate(data):
            if not isinstance(raw, dict):
                raise CatalogError(f"Pack #{i} is not an object")
            name = str(raw.get("name") or f"pack_{i}")
            prompts = raw.get("black", raw.get("prompt", []))
            responses = raw.get("white", raw.get("response", []))
            packs.append(Pack(
                name=name,
                prompts=tuple(_parse_card(c, name) for c in prompts),
                responses=tuple(_parse_card(c, name) for c in responses),
            ))
        return cls(packs=tuple(packs))


def _parse_card(raw: Any, default_pack: str) -> Card:
    if isinstance(raw, str):
        card = Card(text=raw, pack=default_pack)
    elif isinstance(raw, dict) and "text" in raw:
        card = Card(text=str(raw["text"]), pack=str(raw.get("pack", default_pack)))
    else:
        raise CatalogError(f"Invalid card entry in pack '{default_pack}': {raw!r}")
    # CardSchema requires non-empty text
    if not card.text.strip():
        raise CatalogError(f"Card with blank text in pack '{default_pack}'")
    return card


def load_catalog(path: str | Path | None = None) -> Catalog:
    """
    Load a catalog from a JSON file.

    Args:
        path: Catalog file (defaults to the bundled starter catalog)

    Returns:
        Parsed Catalog

    Raises:
        CatalogError: If the file is missing or malformed
    """
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        with open(catalog_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise CatalogError(f"Catalog file not found: {catalog_path}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog file is not valid JSON: {e}") from e

    catalog = Catalog.from_data(data)
    logger.info(
        f"Loaded catalog {catalog_path.name}: {len(catalog.packs)} packs, "
        f"{catalog.prompt_count} prompts, {catalog.response_count} responses"
    )
    return catalog
