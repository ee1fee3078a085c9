"""
Vehicle/collaborator relation helpers.

The relation is stored only on the vehicle side. These helpers derive the
inverse view on read; they never mutate.
"""
from typing import Dict, Iterable, List, Optional


def build_assignment_index(vehicles: Iterable) -> Dict[int, List[int]]:
    """Map collaborator id -> ids of the vehicles pointing at it, in storage order."""
    index: Dict[int, List[int]] = {}
    for vehicle in vehicles:
        if vehicle.collaborator_id is not None:
            index.setdefault(vehicle.collaborator_id, []).append(vehicle.id)
    return index


def current_vehicle_for(vehicles: Iterable, collaborator_id: int):
    """
    The collaborator's current vehicle.

    If several vehicles point at the same collaborator (possible after a
    direct assign), the first one in storage order wins.
    """
    return next((v for v in vehicles if v.collaborator_id == collaborator_id), None)


def vehicles_to_release(vehicles: Iterable, collaborator_id: int, keep_vehicle_id: Optional[int]) -> List:
    return [
        v for v in vehicles
        if v.collaborator_id == collaborator_id and v.id != keep_vehicle_id
    ]
