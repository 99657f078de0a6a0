from dataclasses import dataclass, field

from cfa_admin.models.chapter import Chapter


@dataclass
class WeightagePlan:
    """
    Chapter weightage for one subject of a mock test.
    Lives only as long as the form that created it.
    """
    level: str = ""
    subject: str = ""
    total_questions: int = 0
    chapters: list[Chapter] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.chapters

    @property
    def enabled_chapters(self) -> list[Chapter]:
        return [c for c in self.chapters if c.enabled]
