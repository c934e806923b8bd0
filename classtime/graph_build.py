from typing import Dict, Iterable, List, Sequence, Tuple
import networkx as nx

from .models import Entry

RESOURCES = ('faculty', 'room')


def build_clash_graph(entries: Sequence[Entry], exempt_faculty_ids: Iterable[str] = ()) -> nx.Graph:
    """Graph over entry positions; an edge joins two entries holding the same
    faculty or room in the same (day, slot) cell.

    Edge attribute ``resources`` is the set of resource kinds shared. Each
    (cell, resource) group forms a clique, so per-kind connected components
    are exactly the double-booking groups.
    """
    exempt = set(exempt_faculty_ids)
    G = nx.Graph()
    groups: Dict[Tuple[str, str, str, str], List[int]] = {}
    for i, e in enumerate(entries):
        G.add_node(i, entry=e)
        if e.faculty_id not in exempt:
            groups.setdefault(('faculty', e.day, e.slot_id, e.faculty_id), []).append(i)
        groups.setdefault(('room', e.day, e.slot_id, e.room_id), []).append(i)
    for (kind, _, _, _), members in groups.items():
        for a in range(len(members)):
            for b in range(a + 1, len(members)):
                u, v = members[a], members[b]
                if G.has_edge(u, v):
                    G[u][v]['resources'].add(kind)
                else:
                    G.add_edge(u, v, resources={kind})
    return G


def clash_groups(G: nx.Graph, kind: str) -> List[List[int]]:
    """Sorted entry positions of every group sharing a resource of ``kind``."""
    edges = [(u, v) for u, v, d in G.edges(data=True) if kind in d['resources']]
    if not edges:
        return []
    H = G.edge_subgraph(edges)
    groups = [sorted(c) for c in nx.connected_components(H)]
    groups.sort(key=lambda g: g[0])
    return groups
