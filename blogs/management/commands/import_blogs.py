# blogs/management/commands/import_blogs.py
import json
import os

from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError

from blogs.models import Blog

KNOWN_KEYS = ('title', 'author', 'content', 'tags')


class Command(BaseCommand):
    help = (
        "Import blog posts from a JSON file.\n\n"
        "Expected format: a JSON array of objects like:\n"
        '[{"title":"...","author":"...","content":"...","tags":"career,tips"}, ...]\n'
        "Any other keys are kept on the post and returned by the API. "
        "Posts are matched by exact title; existing ones are skipped unless --update is given."
    )

    def add_arguments(self, parser):
        parser.add_argument('path', type=str, help='Path to the JSON file to import.')
        parser.add_argument('--update', action='store_true', help='Update existing posts (match by title).')

    def handle(self, *args, **options):
        path = options['path']
        update = options['update']

        if not os.path.exists(path):
            raise CommandError(f"File not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise CommandError(f"Failed to load JSON: {exc}")

        if not isinstance(data, list):
            raise CommandError("JSON root must be a list/array of blog objects.")

        created = updated = skipped = errors = 0

        for idx, item in enumerate(data, start=1):
            if not isinstance(item, dict):
                self.stderr.write(f"[{idx}] Skipping: not an object.")
                skipped += 1
                continue
            title = str(item.get('title', '')).strip()
            if not title:
                self.stderr.write(f"[{idx}] Skipping: missing title.")
                skipped += 1
                continue

            tags = item.get('tags', '') or ''
            if isinstance(tags, list):
                tags = ','.join(str(t) for t in tags)
            defaults = {
                'author': str(item.get('author', '') or ''),
                'content': str(item.get('content', '') or ''),
                'tags': tags,
                'details': {k: v for k, v in item.items() if k not in KNOWN_KEYS and k not in ('id', '_id')},
            }

            try:
                existing = Blog.objects.filter(title=title).first()
                if existing:
                    if update:
                        for k, v in defaults.items():
                            setattr(existing, k, v)
                        existing.save()
                        updated += 1
                        self.stdout.write(f"[{idx}] Updated: title='{title}'")
                    else:
                        skipped += 1
                        self.stdout.write(f"[{idx}] Exists, skipped: title='{title}'")
                    continue

                Blog.objects.create(title=title, **defaults)
                created += 1
                self.stdout.write(f"[{idx}] Created: title='{title}'")
            except DatabaseError as e:
                errors += 1
                self.stderr.write(f"[{idx}] ERROR: {e}")

        self.stdout.write(self.style.SUCCESS(
            f"Import finished. Created={created}, Updated={updated}, Skipped={skipped}, Errors={errors}"
        ))
