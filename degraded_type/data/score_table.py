# /degraded_type/data/score_table.py

import csv
import math
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

@dataclass(frozen=True)
class ScoreRecord:
    year: int
    score: float

@dataclass
class ScoreTable:
    """Per-entity yearly scores, each entity's records sorted by year."""
    records: Dict[str, List[ScoreRecord]] = field(default_factory=dict)

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[dict],
        entity_column: str = "Entity",
        year_column: str = "Year",
        score_column: str = "Score",
    ) -> "ScoreTable":
        """Builds a table from dict rows, skipping rows without an entity or a numeric year and score."""
        by_entity = defaultdict(list)
        skipped = 0
        for row in rows:
            entity = (row.get(entity_column) or "").strip()
            try:
                year = int(str(row.get(year_column)).strip())
                score = float(str(row.get(score_column)).strip())
            except (TypeError, ValueError):
                skipped += 1
                continue
            if not entity or math.isnan(score):
                skipped += 1
                continue
            by_entity[entity].append(ScoreRecord(year=year, score=score))

        if skipped:
            logging.debug(f"Skipped {skipped} rows with missing or non-numeric values.")

        for records in by_entity.values():
            records.sort(key=lambda r: r.year)
        return cls(records=dict(by_entity))

    @classmethod
    def from_csv(
        cls,
        path: Union[str, Path],
        entity_column: str = "Entity",
        year_column: str = "Year",
        score_column: str = "Score",
    ) -> "ScoreTable":
        path = Path(path)
        logging.info(f"Loading scores from: {path}")
        with open(path, 'r', newline='', encoding='utf-8') as f:
            reader = csv.DictReader(f)
            missing = [c for c in (entity_column, year_column, score_column) if c not in (reader.fieldnames or [])]
            if missing:
                raise ValueError(f"CSV file {path} is missing columns: {missing}")
            table = cls.from_rows(reader, entity_column, year_column, score_column)
        logging.info(f"Loaded {sum(len(r) for r in table.records.values())} scores for {len(table.records)} entities.")
        return table

    def entities(self) -> List[str]:
        return sorted(self.records)

    def year_range(self, entity: str) -> Optional[Tuple[int, int]]:
        records = self.records.get(entity)
        if not records:
            return None
        return records[0].year, records[-1].year

    def latest_year(self, entity: str) -> Optional[int]:
        year_range = self.year_range(entity)
        return year_range[1] if year_range else None

    def lookup(self, entity: str, year: Optional[int] = None) -> Optional[float]:
        """
        Score for `entity` in `year`. Without an exact match, the latest
        earlier year is used; years before the first record fall back to the
        first record. Unknown entities give None.
        """
        records = self.records.get(entity)
        if not records:
            return None
        if year is None:
            return records[-1].score

        best = records[0]
        for record in records:
            if record.year == year:
                return record.score
            if best.year <= record.year <= year:
                best = record
        return best.score
