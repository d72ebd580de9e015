# blogs/models.py
from django.db import models


class Blog(models.Model):
    title = models.CharField(max_length=255, db_index=True)
    author = models.CharField(max_length=120, blank=True)
    content = models.TextField(blank=True)
    tags = models.CharField(max_length=255, blank=True, help_text='comma-separated tags')
    details = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.title

    def tag_list(self):
        if not self.tags:
            return []
        return [t.strip().lower() for t in self.tags.split(',') if t.strip()]

    def save(self, *args, **kwargs):
        # normalize tags (lowercase, no extra spaces)
        if self.tags:
            self.tags = ','.join(self.tag_list())
        super().save(*args, **kwargs)

    def as_json(self):
        data = dict(self.details or {})
        data.update({
            'id': self.id,
            'title': self.title,
            'author': self.author,
            'content': self.content,
            'tags': self.tag_list(),
            'created_at': self.created_at.isoformat() if self.created_at else None,
        })
        return data
