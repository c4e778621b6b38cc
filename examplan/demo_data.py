import random
from datetime import date, time, timedelta
from typing import List

from faker import Faker

from .models import EXAM_TYPES, Exam, Group, Level, Module, Room, Semester, Snapshot, Teacher

DEPARTMENTS = ["Computer Science", "Mathematics", "Physics", "Chemistry", "Economics", "Biology"]
BUILDINGS = ["Building A", "Building B", "Main Building", "Science Hall"]
SLOTS = [time(8, 30), time(10, 30), time(13, 0), time(15, 0)]
DURATIONS = [60, 90, 120, 180]


def _weekdays(start: date, n: int) -> List[date]:
    days = []
    d = start
    while len(days) < n:
        if d.weekday() < 5:
            days.append(d)
        d += timedelta(days=1)
    return days

def generate_snapshot(n_teachers: int = 12, n_rooms: int = 6, n_modules: int = 10, n_exams: int = 20,
                      seed: int = 42, start_date: date = date(2025, 1, 13), n_days: int = 5) -> Snapshot:
    """Synthetic directory for demos: same seed, same snapshot.

    Exams are packed into a few weekdays and fixed slots, and durations can
    run past the next slot, so room, teacher and surveillant conflicts show up.
    About a third of the exams start without surveillants.
    """
    rng = random.Random(seed)
    fake = Faker()
    Faker.seed(seed)

    teachers = []
    for tid in range(1, n_teachers + 1):
        name = fake.name()
        teachers.append(Teacher(
            id=tid,
            name=name,
            email=f"{name.lower().replace(' ', '.').replace(',', '')}@univ.example",
            department=rng.choice(DEPARTMENTS),
            office=f"{rng.choice('ABC')}{rng.randint(100, 399)}",
            phone=fake.phone_number(),
        ))

    rooms = []
    for rid in range(1, n_rooms + 1):
        rooms.append(Room(id=rid, name=f"Room {rng.randint(1, 3)}{rid:02d}",
                          capacity=rng.choice([25, 30, 40, 60, 120]), location=rng.choice(BUILDINGS)))

    semesters = [Semester(id=1, name="Fall", year_id=1), Semester(id=2, name="Spring", year_id=1)]
    levels = [Level(id=1, name="License 1", code="L1"), Level(id=2, name="License 2", code="L2")]
    groups = [Group(id=gid, name=f"Group {chr(64 + gid)}", level_id=1 + gid % 2, capacity=30)
              for gid in range(1, 5)]

    modules = []
    for mid in range(1, n_modules + 1):
        dept = rng.choice(DEPARTMENTS)
        modules.append(Module(id=mid, code=f"{dept[:3].upper()}{100 + mid}", name=f"{dept} {mid}",
                              semester_id=rng.choice([1, 2]),
                              teacher_id=rng.randint(1, n_teachers) if n_teachers else None))

    days = _weekdays(start_date, n_days)
    exams = []
    for eid in range(1, n_exams + 1):
        n_rooms_used = min(len(rooms), rng.choice([1, 1, 2]))
        room_ids = sorted(rng.sample([r.id for r in rooms], n_rooms_used)) if rooms else []
        surveillants: List[int] = []
        if teachers and rng.random() > 0.35:
            surveillants = rng.sample([t.id for t in teachers], min(len(teachers), n_rooms_used))
        exams.append(Exam(
            id=eid,
            module_id=rng.randint(1, n_modules) if n_modules else 0,
            date=rng.choice(days),
            start_time=rng.choice(SLOTS),
            duration=rng.choice(DURATIONS),
            type=rng.choice(EXAM_TYPES),
            room_ids=room_ids,
            group_ids=sorted(rng.sample([g.id for g in groups], rng.randint(1, 2))),
            surveillant_ids=surveillants,
        ))

    return Snapshot.from_records(rooms=rooms, teachers=teachers, modules=modules, groups=groups,
                                 exams=exams, semesters=semesters, levels=levels)
