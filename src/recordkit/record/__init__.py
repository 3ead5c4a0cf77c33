"""Record – the persistence base every stored entity type inherits."""
from recordkit.record.base import RecordBase
from recordkit.record.partial import clone_partial, overlay_values, record_fields

__all__ = ["RecordBase", "clone_partial", "overlay_values", "record_fields"]
