from .chapter import Chapter
from .weightage import WeightagePlan
from .catalog import ChapterEntry, Subject, Level
from .mock_test import MockTestDraft, DIFFICULTIES
