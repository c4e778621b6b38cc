from typing import Set
import networkx as nx

from .models import Snapshot
from .scheduling.overlap import exams_overlap


def build_conflict_graph(snapshot: Snapshot) -> nx.Graph:
    """Exam ids as nodes; an edge joins two overlapping exams sharing a constrained resource.

    Edge attribute ``kinds`` holds the resource tags ('room', 'teacher',
    'surveillant') the two exams collide on.
    """
    G = nx.Graph()
    exams = list(snapshot.exams.values())
    G.add_nodes_from(e.id for e in exams)
    for i in range(len(exams)):
        for j in range(i + 1, len(exams)):
            a, b = exams[i], exams[j]
            if not exams_overlap(a, b):
                continue
            kinds: Set[str] = set()
            if set(a.room_ids) & set(b.room_ids):
                kinds.add('room')
            ma, mb = snapshot.module(a.module_id), snapshot.module(b.module_id)
            if ma is not None and mb is not None and ma.teacher_id is not None \
                    and ma.teacher_id == mb.teacher_id:
                kinds.add('teacher')
            if set(a.surveillant_ids) & set(b.surveillant_ids):
                kinds.add('surveillant')
            if kinds:
                G.add_edge(a.id, b.id, kinds=kinds)
    return G
