"""
Lexicon entry record.

One Entry holds a single CEDICT line (or tabular row): both head forms,
the pronunciation, the separator-delimited senses and an optional
proficiency tier. The derived fields are properties so they can never
drift from ``head_simplified``.
"""

from dataclasses import dataclass
from typing import List, Optional

from zidian.constants import LEVEL_TAG, SENSE_SEPARATOR


@dataclass(frozen=True, slots=True)
class Entry:
    """
    A dictionary entry.
    
    Attributes:
        head_simplified: Head form in simplified script
        head_traditional: Head form in traditional script
        pronunciation: Pinyin with tone numbers (e.g. "ni3 hao3")
        definition: Senses joined by SENSE_SEPARATOR
        level: Proficiency tier (HSK level), None if ungraded
        seq: Position of the entry in its source
    """
    head_simplified: str
    head_traditional: str
    pronunciation: str = ""
    definition: str = ""
    level: Optional[int] = None
    seq: int = 0
    
    def __post_init__(self):
        if not self.head_simplified:
            raise ValueError("head_simplified must be non-empty")
        if not self.head_traditional:
            raise ValueError("head_traditional must be non-empty")
    
    @property
    def is_single_char(self) -> bool:
        """True if the simplified head is exactly one character."""
        return len(self.head_simplified) == 1
    
    @property
    def index_key(self) -> str:
        """Leading character of the simplified head (bucket key)."""
        return self.head_simplified[0]
    
    @property
    def senses(self) -> List[str]:
        """Definition split into individual senses."""
        return [s for s in self.definition.split(SENSE_SEPARATOR) if s]
    
    @property
    def level_tag(self) -> str:
        """Tier tag such as "HSK3", or an empty string."""
        return f"{LEVEL_TAG}{self.level}" if self.level is not None else ""
    
    def render(self) -> str:
        """
        Render the entry for display.
        
        Example:
            - 你好 | 你好 [ni3 hao3] HSK1
            - hello
            - hi
        """
        header = f"- {self.head_simplified} | {self.head_traditional} [{self.pronunciation}]"
        if self.level is not None:
            header += f" {self.level_tag}"
        lines = [header]
        lines.extend(f"- {sense}" for sense in self.senses)
        return "\n".join(lines)
    
    def to_dict(self) -> dict:
        return {
            "simplified": self.head_simplified,
            "traditional": self.head_traditional,
            "pronunciation": self.pronunciation,
            "senses": self.senses,
            "level": self.level,
        }
    
    def __str__(self) -> str:
        return self.render()
