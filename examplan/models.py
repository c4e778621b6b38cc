from dataclasses import dataclass, field, replace
from datetime import date, time
from typing import Dict, Iterable, List, Optional, Union

EXAM_TYPES = ('Written', 'Oral', 'Practical', 'Online')
EXAM_STATUSES = ('Scheduled', 'Completed', 'Cancelled')


@dataclass
class Room:
    id: int
    name: str
    capacity: int = 0
    location: str = ''

@dataclass
class Teacher:
    id: int
    name: str
    email: str = ''
    department: Optional[str] = None
    office: Optional[str] = None
    phone: Optional[str] = None

@dataclass
class Module:
    id: int
    code: str
    name: str
    semester_id: Optional[int] = None
    teacher_id: Optional[int] = None  # responsible teacher

@dataclass
class Group:
    id: int
    name: str
    level_id: Optional[int] = None
    capacity: int = 0

@dataclass
class Semester:
    id: int
    name: str
    year_id: Optional[int] = None

@dataclass
class Level:
    id: int
    name: str
    code: str = ''

@dataclass
class Exam:
    id: int
    module_id: int
    date: date
    start_time: time
    duration: int = 120  # minutes
    type: str = 'Written'
    room_ids: List[int] = field(default_factory=list)
    group_ids: List[int] = field(default_factory=list)
    surveillant_ids: List[int] = field(default_factory=list)
    status: str = 'Scheduled'

    @property
    def when(self) -> str:
        return f"{self.date.isoformat()} at {self.start_time.strftime('%H:%M')}"


# Conflict descriptors: one variant per constrained resource.

@dataclass(frozen=True)
class RoomConflict:
    rooms: List[str]
    exam_id: int
    exam_name: str
    time: str
    type: str = field(default='room', init=False)

    def as_dict(self) -> dict:
        return {'type': self.type, 'rooms': list(self.rooms), 'examId': self.exam_id,
                'examName': self.exam_name, 'time': self.time}

@dataclass(frozen=True)
class TeacherConflict:
    teacher: str
    exam_id: int
    exam_name: str
    time: str
    type: str = field(default='teacher', init=False)

    def as_dict(self) -> dict:
        return {'type': self.type, 'teacher': self.teacher, 'examId': self.exam_id,
                'examName': self.exam_name, 'time': self.time}

@dataclass(frozen=True)
class SurveillantConflict:
    surveillants: List[str]
    exam_id: int
    exam_name: str
    time: str
    type: str = field(default='surveillant', init=False)

    def as_dict(self) -> dict:
        return {'type': self.type, 'surveillants': list(self.surveillants), 'examId': self.exam_id,
                'examName': self.exam_name, 'time': self.time}

Conflict = Union[RoomConflict, TeacherConflict, SurveillantConflict]


def _by_id(records: Iterable) -> Dict[int, object]:
    return {r.id: r for r in records}

@dataclass(frozen=True)
class Snapshot:
    """Read-only view of every entity collection, keyed by id in insertion order.

    Lookups fail soft: an unknown id gives ``None``. Core functions read a
    snapshot and never modify it; ``with_exam`` returns a new one.
    """
    rooms: Dict[int, Room] = field(default_factory=dict)
    teachers: Dict[int, Teacher] = field(default_factory=dict)
    modules: Dict[int, Module] = field(default_factory=dict)
    groups: Dict[int, Group] = field(default_factory=dict)
    exams: Dict[int, Exam] = field(default_factory=dict)
    semesters: Dict[int, Semester] = field(default_factory=dict)
    levels: Dict[int, Level] = field(default_factory=dict)

    @classmethod
    def from_records(cls, rooms=(), teachers=(), modules=(), groups=(), exams=(),
                     semesters=(), levels=()) -> 'Snapshot':
        return cls(rooms=_by_id(rooms), teachers=_by_id(teachers), modules=_by_id(modules),
                   groups=_by_id(groups), exams=_by_id(exams), semesters=_by_id(semesters),
                   levels=_by_id(levels))

    def room(self, room_id) -> Optional[Room]:
        return self.rooms.get(room_id)

    def teacher(self, teacher_id) -> Optional[Teacher]:
        return self.teachers.get(teacher_id)

    def module(self, module_id) -> Optional[Module]:
        return self.modules.get(module_id)

    def group(self, group_id) -> Optional[Group]:
        return self.groups.get(group_id)

    def exam(self, exam_id) -> Optional[Exam]:
        return self.exams.get(exam_id)

    def with_exam(self, exam: Exam) -> 'Snapshot':
        exams = dict(self.exams)
        exams[exam.id] = exam
        return replace(self, exams=exams)
