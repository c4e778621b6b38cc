from collections import Counter
from typing import Dict, List
import networkx as nx

from ..graph_build import build_conflict_graph
from ..models import Conflict, Snapshot
from .conflicts import check_exam_conflicts
from .workload import exams_needing_surveillants, invigilation_status, teacher_workload


def find_all_conflicts(snapshot: Snapshot) -> Dict[int, List[Conflict]]:
    """Conflicts of every exam against the others; exams without conflicts are left out."""
    found: Dict[int, List[Conflict]] = {}
    for exam in snapshot.exams.values():
        conflicts = check_exam_conflicts(snapshot, exam)
        if conflicts:
            found[exam.id] = conflicts
    return found

def _greedy_clique(G: nx.Graph) -> set:
    """Greedy maximal clique: a block of exams that all collide with each other.

    Starts from the highest-degree exam and keeps adding an exam adjacent to
    every member so far. Heuristic, not the maximum clique.
    """
    if G.number_of_edges() == 0:
        return set()
    seed = max(G.nodes(), key=lambda u: G.degree(u))
    clique = {seed}
    candidates = set(G.neighbors(seed))
    while candidates:
        u = max(candidates, key=lambda v: G.degree(v))
        clique.add(u)
        candidates = {v for v in candidates if v != u and G.has_edge(u, v)}
    return clique

def summary(snapshot: Snapshot, top: int = 5) -> str:
    G = build_conflict_graph(snapshot)
    by_kind = Counter()
    for _, _, kinds in G.edges(data='kinds'):
        by_kind.update(kinds)
    clusters = [c for c in nx.connected_components(G) if len(c) > 1]
    largest = max(clusters, key=len) if clusters else set()
    block = _greedy_clique(G)
    statuses = Counter(invigilation_status(e) for e in snapshot.exams.values())
    needing = exams_needing_surveillants(snapshot)
    workload = teacher_workload(snapshot)
    busiest = sorted(workload.items(), key=lambda kv: kv[1], reverse=True)[:top]

    lines = [
        f"Exams: {len(snapshot.exams)}  Rooms: {len(snapshot.rooms)}  "
        f"Teachers: {len(snapshot.teachers)}  Modules: {len(snapshot.modules)}",
        f"Conflicting pairs: {G.number_of_edges()}  "
        f"(room: {by_kind['room']}, teacher: {by_kind['teacher']}, surveillant: {by_kind['surveillant']})",
        f"Largest conflict cluster: {len(largest)} exam(s)"
        + (f" {sorted(largest)}" if largest else ""),
        f"Mutually conflicting block: {len(block)} exam(s)" + (f" {sorted(block)}" if block else ""),
        f"Invigilation: {statuses['Assigned']} assigned, {statuses['PartiallyAssigned']} partial, "
        f"{statuses['Unassigned']} unassigned",
    ]
    if needing:
        lines.append("Exams needing surveillants: " + ", ".join(str(e.id) for e in needing))
    if busiest:
        names = []
        for tid, n in busiest:
            teacher = snapshot.teacher(tid)
            names.append(f"{teacher.name if teacher else tid} ({n})")
        lines.append("Busiest teachers: " + ", ".join(names))
    return "\n".join(lines) + "\n"
