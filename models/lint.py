# models/lint.py
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class LintIssue:
    path: str
    rule: str
    severity: Severity
    message: str
    line: Optional[int] = None

    def __str__(self) -> str:
        location = f"{self.path}:{self.line}" if self.line else self.path
        return f"{location}: {self.severity.value} [{self.rule}] {self.message}"


@dataclass
class LintReport:
    issues: List[LintIssue] = field(default_factory=list)

    @property
    def errors(self) -> List[LintIssue]:
        return [i for i in self.issues if i.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[LintIssue]:
        return [i for i in self.issues if i.severity is Severity.WARNING]

    @property
    def ok(self) -> bool:
        return not self.errors

    def extend(self, issues) -> None:
        self.issues.extend(issues)

    def rules(self) -> List[str]:
        return [i.rule for i in self.issues]

    def by_path(self) -> Dict[str, List[LintIssue]]:
        grouped = defaultdict(list)
        for issue in self.issues:
            grouped[issue.path].append(issue)
        return dict(grouped)
