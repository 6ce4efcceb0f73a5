import logging
from typing import Callable, List, Optional, Union

from pydantic import ValidationError

from schemas import ClassSession, Identifier, Material, Schedule, new_id, same_id, utcnow
from seed_data import sample_classes, sample_schedules
from validation import conflict_message, find_schedule_conflict

logger = logging.getLogger(__name__)

SLOT_FIELDS = ("date", "room", "start_time", "end_time")


def parse_tags(tags: Union[str, List[str], None]) -> List[str]:
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = tags.split(",")
    return [t.strip() for t in tags if t and t.strip()]


class ClassStore:
    """
    Classes and their schedules, purely in memory.

    Operations return ``{"success": bool, ...}`` dicts. A room cannot be
    double-booked: scheduling or moving a slot onto an overlapping one in the
    same room and date fails and leaves the store unchanged.
    """

    def __init__(self, seed: bool = True):
        self.classes: List[ClassSession] = sample_classes() if seed else []
        self.schedules: List[Schedule] = sample_schedules() if seed else []
        self.loading = False
        self.error: Optional[str] = None

    def _run(self, action: Callable[[], dict]) -> dict:
        self.loading = True
        self.error = None
        try:
            return action()
        except ValidationError as e:
            self.error = str(e)
            logger.warning("Rejected class/schedule data: %s", e.error_count())
            return {"success": False, "error": self.error}
        finally:
            self.loading = False

    def get_class(self, class_id: Identifier) -> Optional[ClassSession]:
        return next((c for c in self.classes if same_id(c.id, class_id)), None)

    def get_schedule(self, schedule_id: Identifier) -> Optional[Schedule]:
        return next((s for s in self.schedules if same_id(s.id, schedule_id)), None)

    def schedules_for_class(self, class_id: Identifier) -> List[Schedule]:
        return [s for s in self.schedules if same_id(s.class_id, class_id)]

    # Classes
    def add_class(self, data: dict) -> dict:
        def action():
            fields = ClassSession.normalize(data)
            fields["tags"] = parse_tags(fields.get("tags"))
            cls = ClassSession.model_validate({**fields, "id": new_id()})
            cls = cls.model_copy(update={"enrolled_students": 0, "created_at": utcnow()})
            self.classes = [*self.classes, cls]
            return {"success": True, "class": cls}

        return self._run(action)

    def update_class(self, class_id: Identifier, updates: dict) -> dict:
        def action():
            fields = ClassSession.normalize(updates)
            if "tags" in fields:
                fields["tags"] = parse_tags(fields["tags"])
            self.classes = [
                ClassSession.model_validate({**c.model_dump(), **fields, "id": c.id}) if same_id(c.id, class_id) else c
                for c in self.classes
            ]
            return {"success": True}

        return self._run(action)

    def delete_class(self, class_id: Identifier) -> dict:
        def action():
            self.classes = [c for c in self.classes if not same_id(c.id, class_id)]
            self.schedules = [s for s in self.schedules if not same_id(s.class_id, class_id)]
            return {"success": True}

        return self._run(action)

    # Schedules
    def schedule_class(self, data: dict) -> dict:
        def action():
            schedule = Schedule.model_validate({
                **Schedule.normalize(data),
                "id": new_id(),
                "status": "scheduled",
                "attendees": 0,
            })
            conflict = find_schedule_conflict(
                self.schedules, schedule.date, schedule.room, schedule.start_time, schedule.end_time
            )
            if conflict is not None:
                return {"success": False, "error": conflict_message(conflict, self.classes), "conflict": conflict}
            self.schedules = [*self.schedules, schedule]
            return {"success": True, "schedule": schedule}

        return self._run(action)

    def update_schedule(self, schedule_id: Identifier, updates: dict) -> dict:
        def action():
            current = self.get_schedule(schedule_id)
            if current is None:
                return {"success": True}
            merged = Schedule.model_validate({**current.model_dump(), **Schedule.normalize(updates), "id": current.id})
            moved = any(getattr(merged, f) != getattr(current, f) for f in SLOT_FIELDS)
            if moved:
                conflict = find_schedule_conflict(
                    self.schedules, merged.date, merged.room, merged.start_time, merged.end_time,
                    exclude_id=schedule_id,
                )
                if conflict is not None:
                    return {"success": False, "error": conflict_message(conflict, self.classes), "conflict": conflict}
            self.schedules = [merged if same_id(s.id, schedule_id) else s for s in self.schedules]
            return {"success": True}

        return self._run(action)

    def delete_schedule(self, schedule_id: Identifier) -> dict:
        def action():
            self.schedules = [s for s in self.schedules if not same_id(s.id, schedule_id)]
            return {"success": True}

        return self._run(action)

    # Materials
    def add_class_material(self, class_id: Identifier, material: Union[Material, dict]) -> Optional[ClassSession]:
        if isinstance(material, dict):
            material = Material.model_validate({"id": new_id(), **material})
        updated = None
        classes = []
        for c in self.classes:
            if same_id(c.id, class_id):
                c = updated = c.model_copy(update={"materials": [*c.materials, material]})
            classes.append(c)
        self.classes = classes
        return updated

    def remove_class_material(self, class_id: Identifier, material_id: Identifier) -> Optional[ClassSession]:
        updated = None
        classes = []
        for c in self.classes:
            if same_id(c.id, class_id):
                c = updated = c.model_copy(update={"materials": [m for m in c.materials if not same_id(m.id, material_id)]})
            classes.append(c)
        self.classes = classes
        return updated
