from typing import Dict, List, Optional, Tuple

from ..models import Exam, Snapshot

BUSY_THRESHOLD = 3  # more invigilations than this marks a teacher busy

UNASSIGNED = 'Unassigned'
PARTIALLY_ASSIGNED = 'PartiallyAssigned'
ASSIGNED = 'Assigned'


def teacher_workload(snapshot: Snapshot) -> Dict[int, int]:
    """Number of exams each known teacher invigilates. Unknown ids are ignored."""
    workload = {tid: 0 for tid in snapshot.teachers}
    for exam in snapshot.exams.values():
        for tid in exam.surveillant_ids:
            if tid in workload:
                workload[tid] += 1
    return workload

def exams_needing_surveillants(snapshot: Snapshot) -> List[Exam]:
    return [e for e in snapshot.exams.values() if not e.surveillant_ids]

def teacher_exams(snapshot: Snapshot, teacher_id: int) -> List[Exam]:
    return [e for e in snapshot.exams.values() if teacher_id in e.surveillant_ids]

def module_name(snapshot: Snapshot, module_id: int) -> str:
    module = snapshot.module(module_id)
    return module.name if module is not None else '-'

def teacher_status(workload: Dict[int, int], teacher_id: int) -> Tuple[str, str]:
    count = workload.get(teacher_id, 0)
    if count > BUSY_THRESHOLD:
        return 'busy', 'Busy'
    if count > 0:
        return 'partial', 'Partially Busy'
    return 'available', 'Available'

def required_surveillants(exam: Exam) -> int:
    """One invigilator per room, at least one per exam."""
    return max(1, len(exam.room_ids))

def invigilation_status(exam: Exam, required: Optional[int] = None) -> str:
    if required is None:
        required = required_surveillants(exam)
    assigned = len(set(exam.surveillant_ids))
    if assigned == 0:
        return UNASSIGNED
    if assigned < required:
        return PARTIALLY_ASSIGNED
    return ASSIGNED
