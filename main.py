import argparse
from dataclasses import replace

from examplan.io_utils import load_snapshot, save_exams_csv
from examplan.models import Snapshot
from examplan.demo_data import generate_snapshot
from examplan.scheduling.availability import get_available_surveillants
from examplan.scheduling.conflicts import check_exam_conflicts
from examplan.scheduling.evaluation import summary
from examplan.scheduling.workload import module_name, required_surveillants
from examplan.algorithms.greedy import auto_assign_all, auto_assign_surveillants, merge_surveillants


def describe(conflict) -> str:
    if conflict.type == 'room':
        what = f"room(s) {', '.join(conflict.rooms)} already booked"
    elif conflict.type == 'teacher':
        what = f"{conflict.teacher} has another exam"
    else:
        what = f"{', '.join(conflict.surveillants)} already invigilating"
    return f"[{conflict.type}] {what}: \"{conflict.exam_name}\" (exam {conflict.exam_id}) on {conflict.time}"


def _require_exam(snapshot: Snapshot, exam_id: int):
    exam = snapshot.exam(exam_id)
    if exam is None:
        raise SystemExit(f"Unknown exam id {exam_id}")
    return exam


def main():
    p = argparse.ArgumentParser(description="ExamPlan – exam conflict checks & surveillant assignment")
    # Input modes
    p.add_argument('--data', type=str, help='Directory with rooms/teachers/modules/groups/exams CSVs')
    p.add_argument('--generate', type=int, default=None, help='Generate a synthetic snapshot with N exams')
    p.add_argument('--seed', type=int, default=42)

    # Actions
    p.add_argument('--check', type=int, metavar='EXAM_ID', help='List conflicts of one exam')
    p.add_argument('--available', type=int, metavar='EXAM_ID', help='List free surveillants for an exam')
    p.add_argument('--auto-assign', dest='auto_assign', type=int, metavar='EXAM_ID',
                   help='Pick surveillants for one exam')
    p.add_argument('--auto-assign-all', dest='auto_assign_all', action='store_true',
                   help='Pick surveillants for every unassigned exam, in order')
    p.add_argument('--count', type=int, default=None,
                   help='Surveillants per exam (default: one per room)')

    # Output
    p.add_argument('--out', type=str, default=None, help='Write the (updated) exams to this CSV')
    args = p.parse_args()

    if args.data:
        snapshot = load_snapshot(args.data)
    elif args.generate is not None:
        snapshot = generate_snapshot(n_exams=args.generate, seed=args.seed)
    else:
        raise SystemExit("Provide --data DIR or --generate N")

    if args.check is not None:
        exam = _require_exam(snapshot, args.check)
        conflicts = check_exam_conflicts(snapshot, exam)
        print(f"Exam {exam.id} ({module_name(snapshot, exam.module_id)}, {exam.when}): "
              f"{len(conflicts)} conflict(s)")
        for c in conflicts:
            print("  " + describe(c))

    if args.available is not None:
        exam = _require_exam(snapshot, args.available)
        free = get_available_surveillants(snapshot, exam.date, exam.start_time, exam.duration,
                                          exclude_exam_id=exam.id)
        print(f"Available surveillants for exam {exam.id}: {len(free)}")
        for t in free:
            print(f"  {t.id}: {t.name}")

    if args.auto_assign is not None:
        exam = _require_exam(snapshot, args.auto_assign)
        count = args.count if args.count is not None else required_surveillants(exam)
        ids = auto_assign_surveillants(snapshot, exam.id, count)
        if not ids:
            print(f"No available surveillants for exam {exam.id}")
        else:
            exam = replace(exam, surveillant_ids=merge_surveillants(exam.surveillant_ids, ids))
            snapshot = snapshot.with_exam(exam)
            print(f"Exam {exam.id}: assigned {ids} -> {exam.surveillant_ids}")

    if args.auto_assign_all:
        snapshot, picked = auto_assign_all(snapshot, count=args.count)
        done = sum(1 for ids in picked.values() if ids)
        print(f"Auto-assigned {done} of {len(picked)} unassigned exam(s)")
        for exam_id, ids in picked.items():
            if not ids:
                print(f"  exam {exam_id}: no available surveillants")

    print(summary(snapshot))

    if args.out:
        save_exams_csv(args.out, snapshot.exams.values())
        print(f"Saved: {args.out}")


if __name__ == '__main__':
    main()
