"""
samples.py — Bundled Maps
=========================
Static map data shipped with the app.  Positions are in map pixels;
edge weights are derived from them by Graph.from_positions.
"""

from typing import Dict, Callable

from graph.node import Node
from graph.graph import Graph


# ---------------------------------------------------------------------------
# Central Bengaluru
# ---------------------------------------------------------------------------
BENGALURU_NODES = [
    Node("shivajinagar",          "Shivajinagar Bus Station", 250, 100),
    Node("cubbon_park_metro",     "Cubbon Park Metro",        200, 250),
    Node("st_marks_cathedral",    "St. Mark's Cathedral",     350, 280),
    Node("mg_road_metro",         "MG Road Metro",            450, 250),
    Node("trinity_metro",         "Trinity Metro",            650, 240),
    Node("visvesvaraya_museum",   "Visvesvaraya Museum",      220, 400),
    Node("ub_city",               "UB City",                  230, 500),
    Node("st_marthas_hospital",   "St. Martha's Hospital",     50, 450),
    Node("corporation_circle",    "Corporation Circle",       100, 600),
    Node("garuda_mall",           "Garuda Mall",              500, 450),
    Node("richmond_circle",       "Richmond Circle",          350, 650),
    Node("johnson_market",        "Johnson Market",           550, 680),
    Node("shantinagar_bus",       "Shantinagar Bus Station",  450, 800),
    Node("brigade_road_junction", "Brigade Road Junction",    520, 350),
    Node("commercial_street",     "Commercial Street",        380, 150),
]

BENGALURU_CONNECTIONS = [
    # Shivajinagar
    ("shivajinagar",          "commercial_street"),
    ("shivajinagar",          "cubbon_park_metro"),
    ("commercial_street",     "mg_road_metro"),
    # MG Road / Cubbon Park
    ("cubbon_park_metro",     "st_marks_cathedral"),
    ("cubbon_park_metro",     "visvesvaraya_museum"),
    ("st_marks_cathedral",    "mg_road_metro"),
    ("st_marks_cathedral",    "visvesvaraya_museum"),
    ("st_marks_cathedral",    "ub_city"),
    ("mg_road_metro",         "trinity_metro"),
    ("mg_road_metro",         "brigade_road_junction"),
    # Brigade Road / Richmond Town
    ("brigade_road_junction", "garuda_mall"),
    ("trinity_metro",         "garuda_mall"),
    ("garuda_mall",           "richmond_circle"),
    ("garuda_mall",           "johnson_market"),
    # South
    ("visvesvaraya_museum",   "ub_city"),
    ("visvesvaraya_museum",   "st_marthas_hospital"),
    ("ub_city",               "richmond_circle"),
    ("ub_city",               "corporation_circle"),
    ("st_marthas_hospital",   "corporation_circle"),
    ("corporation_circle",    "richmond_circle"),
    ("richmond_circle",       "shantinagar_bus"),
    ("richmond_circle",       "johnson_market"),
    ("johnson_market",        "shantinagar_bus"),
]


def bengaluru_graph() -> Graph:
    return Graph.from_positions(BENGALURU_NODES, BENGALURU_CONNECTIONS)


SAMPLES: Dict[str, Callable[[], Graph]] = {
    "bengaluru": bengaluru_graph,
}


def load_sample(name: str) -> Graph:
    """Build a bundled map by name.  Raises KeyError for unknown names."""
    try:
        factory = SAMPLES[name]
    except KeyError:
        raise KeyError(f"Unknown sample map: {name!r}") from None
    return factory()
