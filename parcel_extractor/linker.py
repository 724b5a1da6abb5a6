import os
import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .owners import CURRENT, OwnerRegistry
from .utils import write_json

logger = logging.getLogger(__name__)


@dataclass
class SaleEvent:
    ref: str
    date: Optional[str] = None


def _base_name(ref):
    name = os.path.basename(str(ref).strip())
    return name[:-5] if name.lower().endswith(".json") else name


class RelationshipSet:
    """Relationship edges keyed by their file name, so each pair is kept once"""

    def __init__(self):
        self._edges = OrderedDict()

    @staticmethod
    def filename(from_ref, to_ref):
        return f"relationship_{_base_name(from_ref)}_has_{_base_name(to_ref)}.json"

    def add(self, from_ref, to_ref) -> bool:
        if not from_ref or not to_ref:
            return False
        filename = self.filename(from_ref, to_ref)
        if filename in self._edges:
            return False
        self._edges[filename] = {"from": {"/": from_ref}, "to": {"/": to_ref}}
        return True

    def __contains__(self, filename):
        return filename in self._edges

    def __len__(self):
        return len(self._edges)

    def __iter__(self):
        return iter(self._edges.items())

    def write(self, data_dir):
        for filename, edge in self._edges.items():
            write_json(os.path.join(data_dir, filename), edge)
        logger.info(f"Wrote {len(self._edges)} relationship files to {data_dir}")


def most_recent_sale(sales: Sequence[SaleEvent]) -> Optional[SaleEvent]:
    """Latest dated sale; undated sales only count when nothing is dated"""
    latest = None
    for sale in sales:
        if latest is None:
            latest = sale
        elif sale.date and (not latest.date or sale.date > latest.date):
            latest = sale
    return latest


def link_sales(
    registry: OwnerRegistry,
    owners_by_date: Dict[str, List[Any]],
    sales: Sequence[SaleEvent],
    relationships: RelationshipSet,
) -> Dict[str, List[str]]:
    """Link owners to the sales whose transfer date matches their snapshot date.

    The most recent sale falls back to the current owners when date matching
    gave it nobody. Returns the owner refs linked to each sale.
    """
    owners_by_date = owners_by_date or {}
    linked = {sale.ref: [] for sale in sales}

    for sale in sales:
        if not sale.date or sale.date == CURRENT:
            continue
        for mention in owners_by_date.get(sale.date) or []:
            owner_ref = registry.register(mention)
            if owner_ref and owner_ref not in linked[sale.ref]:
                relationships.add(sale.ref, owner_ref)
                linked[sale.ref].append(owner_ref)

    latest = most_recent_sale(sales)
    current_owners = owners_by_date.get(CURRENT) or []
    if latest and current_owners and not linked[latest.ref]:
        logger.info(f"No dated owners for {latest.ref}, linking current owners")
        for mention in current_owners:
            owner_ref = registry.register(mention)
            if owner_ref and owner_ref not in linked[latest.ref]:
                relationships.add(latest.ref, owner_ref)
                linked[latest.ref].append(owner_ref)

    return linked


def link_mailing_address(
    registry: OwnerRegistry,
    owners_by_date: Dict[str, List[Any]],
    mailing_ref: Optional[str],
    relationships: RelationshipSet,
) -> List[str]:
    """Link the current owners to the extracted mailing address, if there is one"""
    if not mailing_ref:
        return []
    owner_refs = []
    for mention in (owners_by_date or {}).get(CURRENT) or []:
        owner_ref = registry.register(mention)
        if owner_ref and owner_ref not in owner_refs:
            relationships.add(owner_ref, mailing_ref)
            owner_refs.append(owner_ref)
    return owner_refs
