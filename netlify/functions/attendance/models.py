from dataclasses import asdict, dataclass, field, replace
from typing import Dict, List, Optional, Union

PRESENT = "Present"
ABSENT = "Absent"

DEFAULT_THRESHOLD_MINUTES = 48.0
DEFAULT_LARGE_CLASS = 40
DEFAULT_BATCH_CODE_LIMIT = 40


@dataclass
class AttendanceRecord:
    name: str
    original_name: str
    time: Union[str, float, None]
    minutes: float
    status: str
    is_alternative: bool

    @property
    def is_present(self) -> bool:
        return self.status == PRESENT


@dataclass
class AlternativeStudent:
    clean_name: str
    original_name: str


# persisted key, attribute, converter
SETTINGS_FIELDS = [
    ("timeThreshold", "time_threshold", float),
    ("largeClassThreshold", "large_class_threshold", int),
    ("batchCodeDisplayLimit", "batch_code_display_limit", int),
]


@dataclass
class Settings:
    time_threshold: float = DEFAULT_THRESHOLD_MINUTES
    large_class_threshold: int = DEFAULT_LARGE_CLASS
    batch_code_display_limit: int = DEFAULT_BATCH_CODE_LIMIT

    @classmethod
    def from_dict(cls, data: Dict, base: Optional["Settings"] = None) -> "Settings":
        data = data or {}
        out = replace(base) if base is not None else cls()
        for key, attr, conv in SETTINGS_FIELDS:
            if data.get(key) in (None, ""):
                continue
            try:
                setattr(out, attr, conv(data[key]))
            except (TypeError, ValueError):
                raise ValueError(f"Invalid value for {key}: {data[key]!r}") from None
        return out

    def to_dict(self) -> Dict:
        return {
            "timeThreshold": self.time_threshold,
            "largeClassThreshold": self.large_class_threshold,
            "batchCodeDisplayLimit": self.batch_code_display_limit,
        }


# persisted key -> attribute
REPORT_FIELDS = {
    "batchName": "batch_name",
    "reportDate": "report_date",
    "trainerName": "trainer_name",
    "coordinators": "coordinators",
    "reportCreator": "report_creator",
    "tldvLink": "tldv_link",
    "sessionSummary": "session_summary",
}


@dataclass
class ReportSettings:
    batch_name: str = ""
    report_date: str = ""
    trainer_name: str = ""
    coordinators: str = ""
    report_creator: str = ""
    tldv_link: str = ""
    session_summary: str = ""

    @classmethod
    def from_dict(cls, data: Dict) -> "ReportSettings":
        data = data or {}
        return cls(**{attr: str(data.get(key) or "") for key, attr in REPORT_FIELDS.items()})

    def to_dict(self) -> Dict[str, str]:
        return {key: getattr(self, attr) for key, attr in REPORT_FIELDS.items()}

    def update(self, data: Dict) -> None:
        for key, attr in REPORT_FIELDS.items():
            if key in data and data[key] is not None:
                setattr(self, attr, str(data[key]))


@dataclass
class ReconcileResult:
    records: List[AttendanceRecord] = field(default_factory=list)
    alternatives: List[AlternativeStudent] = field(default_factory=list)
    present: List[str] = field(default_factory=list)
    absent: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.records)

    def to_dict(self) -> Dict:
        return {
            "records": [asdict(r) for r in self.records],
            "alternatives": [asdict(a) for a in self.alternatives],
            "present": list(self.present),
            "absent": list(self.absent),
        }
