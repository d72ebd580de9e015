# blogs/admin.py
from django.contrib import admin
from .models import Blog


@admin.register(Blog)
class BlogAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'author', 'short_content', 'created_at')
    search_fields = ('title', 'author', 'tags')

    def short_content(self, obj):
        return obj.content[:60]
    short_content.short_description = 'Content'
