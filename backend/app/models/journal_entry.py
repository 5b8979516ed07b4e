from tortoise import fields, models

DEFAULT_JOURNAL_TITLE = "Untitled Entry"

class JournalEntry(models.Model):
    id = fields.UUIDField(pk=True)
    user = fields.ForeignKeyField("models.User", related_name="journal_entries", on_delete=fields.CASCADE)
    title = fields.CharField(max_length=150, default=DEFAULT_JOURNAL_TITLE)
    content = fields.TextField()
    entry_date = fields.DatetimeField(index=True)
    associated_mood = fields.CharField(max_length=16, default="")  # A mood from MOODS or ""
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        table = "journal_entries"
