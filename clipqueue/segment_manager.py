"""
Segment management state: the list, the add/edit form and delete confirmation.

This module holds the client-side model of a project's segments:
- SegmentForm: raw text fields as typed by the user, validated into a SegmentDraft
- SegmentList: ordered view with move up/down and display labels
- SegmentManager: which panel is open, what is being edited, pending deletes,
  the last error, and change notification for autosave

Nothing here talks to the network; callers persist changes through the
segments API (see make_autosave for the debounced save hook).
"""

import asyncio
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional

from clipqueue.utils.debounce import Debouncer
from clipqueue.utils.time_utils import seconds_to_time, time_to_seconds, validate_time_range
from clipqueue.utils.validator import Rule, ValidationResult, Validator

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
DEFAULT_SEGMENT_LENGTH = 30
AUTOSAVE_DELAY_MS = 2000


@dataclass
class Segment:
    id: str
    title: str
    start_time: float
    end_time: float
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    order: int = 0
    video_id: Optional[str] = None

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def to_payload(self) -> Dict[str, Any]:
        """camelCase body for the segments API."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "videoId": self.video_id,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "orderIndex": self.order,
        }


@dataclass
class SegmentDraft:
    """Validated form contents, times in seconds."""
    title: str
    start_time: int
    end_time: int
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)


def _time_format_rule() -> Rule:
    def check(value: Any) -> ValidationResult:
        try:
            time_to_seconds(value)
        except (ValueError, AttributeError):
            return ValidationResult.fail("Enter a time like 1:30 or 0:05:30.")
        return ValidationResult.ok()
    return Rule.custom(check)


TITLE_RULES = [Rule.required(), Rule.max_length(TITLE_MAX_LENGTH)]
DESCRIPTION_RULES = [Rule.max_length(DESCRIPTION_MAX_LENGTH)]
TIME_RULES = [Rule.required(), _time_format_rule()]


@dataclass
class SegmentForm:
    """
    The add/edit segment form.

    Times are kept as the strings the user typed ("1:30", "0:05:30") and only
    converted to seconds by to_request().
    """
    title: str = ""
    description: str = ""
    start_time: str = "0:00"
    end_time: str = seconds_to_time(DEFAULT_SEGMENT_LENGTH)
    tags: str = ""
    video_duration: Optional[float] = None

    @classmethod
    def for_new(cls, video_title: Optional[str] = None, current_time: float = 0,
                video_duration: Optional[float] = None) -> "SegmentForm":
        """Blank form starting at the player's position and running 30 seconds."""
        return cls(
            title=f"{video_title} segment" if video_title else "",
            start_time=seconds_to_time(current_time),
            end_time=seconds_to_time(current_time + DEFAULT_SEGMENT_LENGTH),
            video_duration=video_duration,
        )

    @classmethod
    def for_segment(cls, segment: Segment, video_duration: Optional[float] = None) -> "SegmentForm":
        return cls(
            title=segment.title,
            description=segment.description or "",
            start_time=seconds_to_time(segment.start_time),
            end_time=seconds_to_time(segment.end_time),
            tags=", ".join(segment.tags),
            video_duration=video_duration,
        )

    def validate(self) -> Dict[str, str]:
        """Field name -> message for every invalid field; empty when the form is valid."""
        errors: Dict[str, str] = {}

        checks = [
            ("title", self.title.strip(), TITLE_RULES),
            ("description", self.description, DESCRIPTION_RULES),
            ("start_time", self.start_time.strip(), TIME_RULES),
            ("end_time", self.end_time.strip(), TIME_RULES),
        ]
        for name, value, rules in checks:
            result = Validator.validate(value, rules)
            if not result.is_valid:
                errors[name] = result.message

        if "start_time" not in errors and "end_time" not in errors:
            message = validate_time_range(self.start_time, self.end_time, self.video_duration)
            if message:
                errors["end_time"] = message

        return errors

    def to_request(self) -> SegmentDraft:
        """
        Trimmed draft with times in seconds and tags split on commas.

        Raises:
            ValueError: if the form does not validate.
        """
        errors = self.validate()
        if errors:
            raise ValueError(next(iter(errors.values())))

        return SegmentDraft(
            title=self.title.strip(),
            description=self.description.strip() or None,
            start_time=time_to_seconds(self.start_time),
            end_time=time_to_seconds(self.end_time),
            tags=[tag.strip() for tag in self.tags.split(",") if tag.strip()],
        )


class SegmentList:
    """Segments sorted by their order field."""

    def __init__(self, segments: List[Segment]):
        self.segments = sorted(segments, key=lambda s: s.order)

    def __len__(self) -> int:
        return len(self.segments)

    def ids(self) -> List[str]:
        return [s.id for s in self.segments]

    def _index(self, segment_id: str) -> int:
        for index, segment in enumerate(self.segments):
            if segment.id == segment_id:
                return index
        raise KeyError(segment_id)

    def _swap(self, index: int, other: int) -> Optional[List[str]]:
        if other < 0 or other >= len(self.segments):
            return None
        order = self.ids()
        order[index], order[other] = order[other], order[index]
        return order

    def move_up(self, segment_id: str) -> Optional[List[str]]:
        """New id order with segment_id one place earlier, or None if it is already first."""
        index = self._index(segment_id)
        return self._swap(index, index - 1)

    def move_down(self, segment_id: str) -> Optional[List[str]]:
        index = self._index(segment_id)
        return self._swap(index, index + 1)

    @staticmethod
    def range_label(segment: Segment) -> str:
        return f"{seconds_to_time(segment.start_time)} - {seconds_to_time(segment.end_time)}"

    @staticmethod
    def duration_label(segment: Segment) -> str:
        return seconds_to_time(segment.duration)


class SegmentManager:
    """
    State of the segment panel for one project.

    Every change to the segment list goes through _set_segments, which calls
    on_change with the new list (typically a debounced save from make_autosave).
    """

    def __init__(
        self,
        project_id: str,
        segments: Optional[List[Segment]] = None,
        on_change: Optional[Callable[[List[Segment]], Any]] = None,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ):
        self.project_id = project_id
        self.segments: List[Segment] = list(segments or [])
        self.on_change = on_change
        self._id_factory = id_factory

        self.is_form_open = False
        self.form: Optional[SegmentForm] = None
        self.editing_segment: Optional[Segment] = None
        self.pending_delete: Optional[str] = None
        self.error: Optional[str] = None

    @property
    def segment_list(self) -> SegmentList:
        return SegmentList(self.segments)

    def get(self, segment_id: str) -> Optional[Segment]:
        return next((s for s in self.segments if s.id == segment_id), None)

    def _set_segments(self, segments: List[Segment]) -> None:
        self.segments = segments
        if self.on_change is not None:
            self.on_change(list(segments))

    # Form

    def open_add_form(self, video_title: Optional[str] = None, current_time: float = 0,
                      video_duration: Optional[float] = None) -> SegmentForm:
        self.editing_segment = None
        self.form = SegmentForm.for_new(video_title, current_time, video_duration)
        self.is_form_open = True
        return self.form

    def edit(self, segment_id: str) -> SegmentForm:
        segment = self.get(segment_id)
        if segment is None:
            raise KeyError(segment_id)
        self.editing_segment = segment
        self.form = SegmentForm.for_segment(segment)
        self.is_form_open = True
        return self.form

    def close_form(self) -> None:
        self.is_form_open = False
        self.editing_segment = None
        self.form = None

    def submit(self, form: Optional[SegmentForm] = None, video_id: Optional[str] = None) -> Optional[Segment]:
        """
        Create or update a segment from the form depending on the current mode.

        Returns the saved segment and closes the form, or returns None and sets
        error (form stays open) if the form does not validate.
        """
        form = form or self.form
        if form is None:
            raise RuntimeError("No segment form is open")

        self.error = None
        try:
            draft = form.to_request()
        except ValueError as e:
            self.error = str(e)
            return None

        if self.editing_segment is None:
            segment = Segment(
                id=self._id_factory(),
                title=draft.title,
                description=draft.description,
                start_time=draft.start_time,
                end_time=draft.end_time,
                tags=draft.tags,
                order=len(self.segments),
                video_id=video_id,
            )
            self._set_segments(self.segments + [segment])
        else:
            segment = replace(
                self.editing_segment,
                title=draft.title,
                description=draft.description,
                start_time=draft.start_time,
                end_time=draft.end_time,
                tags=draft.tags,
            )
            self._set_segments([segment if s.id == segment.id else s for s in self.segments])

        self.close_form()
        return segment

    # Delete with confirmation

    def request_delete(self, segment_id: str) -> None:
        if self.get(segment_id) is None:
            raise KeyError(segment_id)
        self.pending_delete = segment_id

    def confirm_delete(self) -> bool:
        """Delete the segment awaiting confirmation; False if none was pending."""
        segment_id = self.pending_delete
        if segment_id is None:
            return False
        self.pending_delete = None
        self.error = None
        self._set_segments([s for s in self.segments if s.id != segment_id])
        if self.editing_segment is not None and self.editing_segment.id == segment_id:
            self.close_form()
        return True

    def cancel_delete(self) -> None:
        self.pending_delete = None

    # Ordering

    def reorder(self, new_order: List[str]) -> None:
        """Apply an id order; ids not in new_order are dropped, unknown ids ignored."""
        self.error = None
        by_id = {s.id: s for s in self.segments}
        reordered = [replace(by_id[segment_id], order=index)
                     for index, segment_id in enumerate(i for i in new_order if i in by_id)]
        self._set_segments(reordered)

    def move_up(self, segment_id: str) -> bool:
        order = self.segment_list.move_up(segment_id)
        if order is None:
            return False
        self.reorder(order)
        return True

    def move_down(self, segment_id: str) -> bool:
        order = self.segment_list.move_down(segment_id)
        if order is None:
            return False
        self.reorder(order)
        return True


def make_autosave(
    save: Callable[[List[Segment]], Any],
    delay_ms: float = AUTOSAVE_DELAY_MS,
    max_wait_ms: Optional[float] = None,
    loop: Optional[asyncio.AbstractEventLoop] = None,
    clock: Optional[Callable[[], float]] = None,
) -> Debouncer:
    """Debounced save suitable as SegmentManager.on_change."""
    return Debouncer(save, delay_ms, max_wait=max_wait_ms, loop=loop, clock=clock)
