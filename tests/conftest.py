from datetime import date, time

import pytest

from examplan.models import Exam, Group, Module, Room, Snapshot, Teacher


def make_exam(id, module_id, day='2025-01-15', start='09:00', duration=120, rooms=(), surveillants=(),
              groups=()):
    h, m = map(int, start.split(':'))
    return Exam(id=id, module_id=module_id, date=date.fromisoformat(day), start_time=time(h, m),
                duration=duration, room_ids=list(rooms), group_ids=list(groups),
                surveillant_ids=list(surveillants))


@pytest.fixture
def rooms():
    return [
        Room(id=1, name='Room 101', capacity=40, location='Building A, Floor 1'),
        Room(id=2, name='Room 202', capacity=30, location='Building A, Floor 2'),
        Room(id=3, name='Lab 1', capacity=25, location='Building B, Floor 1'),
    ]

@pytest.fixture
def teachers():
    return [
        Teacher(id=10, name='Dr. Ahmed', email='ahmed@univ.example'),
        Teacher(id=2, name='Dr. Benali', email='benali@univ.example'),
        Teacher(id=3, name='Dr. Chaoui', email='chaoui@univ.example'),
        Teacher(id=4, name='Dr. Djebbar', email='djebbar@univ.example'),
        Teacher(id=11, name='Dr. Khelifi', email='khelifi@univ.example'),
    ]

@pytest.fixture
def modules():
    return [
        Module(id=1, code='ALG1', name='Algorithms', teacher_id=10),
        Module(id=2, code='DB1', name='Databases', teacher_id=10),
        Module(id=3, code='NET1', name='Networks', teacher_id=11),
    ]

@pytest.fixture
def groups():
    return [Group(id=1, name='Group A', level_id=1, capacity=30),
            Group(id=2, name='Group B', level_id=1, capacity=30)]

@pytest.fixture
def snapshot(rooms, teachers, modules, groups):
    exams = [make_exam(1, 1, start='09:00', duration=120, rooms=[1], surveillants=[2], groups=[1])]
    return Snapshot.from_records(rooms=rooms, teachers=teachers, modules=modules, groups=groups, exams=exams)

@pytest.fixture(name='make_exam')
def make_exam_fixture():
    return make_exam
