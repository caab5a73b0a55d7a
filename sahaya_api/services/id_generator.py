"""Human-readable sequential IDs such as CMRF-GUN-2024-000001."""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from sahaya_api.models.audit import IdCounter

logger = logging.getLogger(__name__)

GENERIC_PARTITION = "GEN"
SEQUENCE_WIDTH = 6


def district_code(district: Optional[str]) -> str:
    """First three letters of the district, upper-cased; GEN when unknown."""
    if not district or not district.strip():
        return GENERIC_PARTITION
    return district.strip()[:3].upper()


def format_human_id(prefix: str, partition: Optional[str], year: int, sequence: int) -> str:
    parts = [prefix]
    if partition:
        parts.append(partition)
    parts.append(str(year))
    parts.append(str(sequence).zfill(SEQUENCE_WIDTH))
    return "-".join(parts)


class IdGenerator:
    """
    Allocates the next sequence number per (entity type, partition, year).

    Invariants:
    - Allocation is one INSERT ... ON CONFLICT DO UPDATE ... RETURNING statement
    - The counter row stays locked until the caller's transaction ends
    - Sequences are dense: the n-th committed allocation for a key returns n
    """

    def __init__(self, db: Session):
        self.db = db

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(IdCounter)
        if dialect == "sqlite":
            return sqlite.insert(IdCounter)
        raise RuntimeError(f"ID allocation is not supported on {dialect}")

    def allocate(self, entity_type: str, partition: Optional[str] = None, year: Optional[int] = None) -> int:
        """Advance the counter and return the new value. Does not commit."""
        if year is None:
            year = datetime.utcnow().year
        stmt = (
            self._insert()
            .values(entity_type=entity_type, partition_key=partition or "", year=year, value=1)
            .on_conflict_do_update(
                index_elements=["entity_type", "partition_key", "year"],
                set_={"value": IdCounter.value + 1},
            )
            .returning(IdCounter.value)
        )
        return self.db.execute(stmt).scalar_one()

    def next(self, entity_type: str, prefix: str, partition: Optional[str] = None, year: Optional[int] = None) -> str:
        if year is None:
            year = datetime.utcnow().year
        sequence = self.allocate(entity_type, partition, year)
        human_id = format_human_id(prefix, partition, year, sequence)
        logger.debug("Allocated %s", human_id, extra={"entity_type": entity_type})
        return human_id
