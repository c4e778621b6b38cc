import csv
import io
import os
from datetime import date, datetime
from typing import Dict, IO, Iterable, List, Optional, Union

from .models import (
    EXAM_STATUSES, EXAM_TYPES, Exam, Group, Module, Room, Snapshot, Teacher,
)

TextOrPath = Union[str, os.PathLike, IO]

ID_SEPARATOR = ';'


def _open_text(src: TextOrPath):
    """Return a text-mode file handle and a flag indicating whether to close it.

    Accepts a filesystem path, a text IO object, or a BytesIO buffer
    (what Streamlit uploads hand over).
    """
    if isinstance(src, (str, os.PathLike)):
        f = open(src, 'r', newline='', encoding='utf-8')
        return f, True
    if isinstance(src, io.BytesIO):
        src.seek(0)
        f = io.TextIOWrapper(src, encoding='utf-8', newline='')
        return f, True
    if hasattr(src, 'read'):
        if hasattr(src, 'seek'):
            src.seek(0)
        return src, False
    raise TypeError("Unsupported input type; expected path or file-like object")

def _rows(src: TextOrPath) -> List[Dict[str, str]]:
    f, should_close = _open_text(src)
    try:
        return [{k.strip(): (v or '').strip() for k, v in row.items() if k} for row in csv.DictReader(f)]
    finally:
        if should_close:
            f.close()

def _opt_int(value: str) -> Optional[int]:
    return int(value) if value else None

def _opt_str(value: str) -> Optional[str]:
    return value or None

def parse_ids(value: str) -> List[int]:
    """'1;2;3' -> [1, 2, 3]; blanks are skipped."""
    return [int(part) for part in str(value).split(ID_SEPARATOR) if part.strip()]

def format_ids(ids: Iterable[int]) -> str:
    return ID_SEPARATOR.join(str(i) for i in ids)


def load_rooms(src: TextOrPath) -> Dict[int, Room]:
    rooms: Dict[int, Room] = {}
    for row in _rows(src):
        rid = int(row['id'])
        rooms[rid] = Room(id=rid, name=row['name'], capacity=int(row.get('capacity') or 0),
                          location=row.get('location', ''))
    return rooms

def load_teachers(src: TextOrPath) -> Dict[int, Teacher]:
    teachers: Dict[int, Teacher] = {}
    for row in _rows(src):
        tid = int(row['id'])
        teachers[tid] = Teacher(
            id=tid,
            name=row['name'],
            email=row.get('email', ''),
            department=_opt_str(row.get('department', '')),
            office=_opt_str(row.get('office', '')),
            phone=_opt_str(row.get('phone', '')),
        )
    return teachers

def load_modules(src: TextOrPath) -> Dict[int, Module]:
    modules: Dict[int, Module] = {}
    for row in _rows(src):
        mid = int(row['id'])
        modules[mid] = Module(
            id=mid,
            code=row.get('code', ''),
            name=row['name'],
            semester_id=_opt_int(row.get('semester_id', '')),
            teacher_id=_opt_int(row.get('teacher_id', '')),
        )
    return modules

def load_groups(src: TextOrPath) -> Dict[int, Group]:
    groups: Dict[int, Group] = {}
    for row in _rows(src):
        gid = int(row['id'])
        groups[gid] = Group(id=gid, name=row['name'], level_id=_opt_int(row.get('level_id', '')),
                            capacity=int(row.get('capacity') or 0))
    return groups

def load_exams(src: TextOrPath) -> Dict[int, Exam]:
    """CSV columns: id,module_id,date,start_time,duration,type,room_ids,group_ids,surveillant_ids,status.

    Raises ValueError on an unknown type or status or a non-positive duration.
    """
    exams: Dict[int, Exam] = {}
    for line, row in enumerate(_rows(src), start=2):
        eid = int(row['id'])
        duration = int(row['duration'])
        exam_type = row.get('type') or 'Written'
        status = row.get('status') or 'Scheduled'
        if duration <= 0:
            raise ValueError(f"exams line {line}: duration must be positive, got {duration}")
        if exam_type not in EXAM_TYPES:
            raise ValueError(f"exams line {line}: unknown exam type {exam_type!r}")
        if status not in EXAM_STATUSES:
            raise ValueError(f"exams line {line}: unknown status {status!r}")
        exams[eid] = Exam(
            id=eid,
            module_id=int(row['module_id']),
            date=date.fromisoformat(row['date']),
            start_time=datetime.strptime(row['start_time'], '%H:%M').time(),
            duration=duration,
            type=exam_type,
            room_ids=parse_ids(row.get('room_ids', '')),
            group_ids=parse_ids(row.get('group_ids', '')),
            surveillant_ids=parse_ids(row.get('surveillant_ids', '')),
            status=status,
        )
    return exams

def load_snapshot(directory: Union[str, os.PathLike]) -> Snapshot:
    """Read rooms/teachers/modules/groups/exams CSVs from a directory.

    Only exams.csv is required; the other collections default to empty.
    """
    def path(name):
        return os.path.join(directory, name)

    def optional(name, loader):
        return loader(path(name)) if os.path.exists(path(name)) else {}

    if not os.path.exists(path('exams.csv')):
        raise FileNotFoundError(f"Missing required file: {path('exams.csv')}")
    return Snapshot(
        rooms=optional('rooms.csv', load_rooms),
        teachers=optional('teachers.csv', load_teachers),
        modules=optional('modules.csv', load_modules),
        groups=optional('groups.csv', load_groups),
        exams=load_exams(path('exams.csv')),
    )

EXAM_COLUMNS = ['id', 'module_id', 'date', 'start_time', 'duration', 'type',
                'room_ids', 'group_ids', 'surveillant_ids', 'status']

def write_exams(f: IO, exams: Iterable[Exam]) -> None:
    w = csv.writer(f)
    w.writerow(EXAM_COLUMNS)
    for e in exams:
        w.writerow([e.id, e.module_id, e.date.isoformat(), e.start_time.strftime('%H:%M'), e.duration,
                    e.type, format_ids(e.room_ids), format_ids(e.group_ids),
                    format_ids(e.surveillant_ids), e.status])

def save_exams_csv(path: str, exams: Iterable[Exam]):
    with open(path, 'w', newline='', encoding='utf-8') as f:
        write_exams(f, exams)
