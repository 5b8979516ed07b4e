"""
Database model for the mood log.
"""
from tortoise import fields, models
from tortoise.validators import MinValueValidator, MaxValueValidator

MOODS = ("happy", "sad", "anxious", "calm", "stressed")

class MoodEntry(models.Model):
    """A single self-reported mood with a 0-10 score."""
    id = fields.UUIDField(pk=True)
    user = fields.ForeignKeyField("models.User", related_name="mood_entries", on_delete=fields.CASCADE)
    mood = fields.CharField(max_length=16)  # One of MOODS
    score = fields.IntField(validators=[MinValueValidator(0), MaxValueValidator(10)])
    notes = fields.CharField(max_length=500, default="")
    entry_date = fields.DatetimeField(index=True)
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "mood_entries"
