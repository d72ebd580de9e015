# blogs/tests.py
import json
import os
import tempfile
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from django.urls import reverse

from .models import Blog


class BlogViewsTest(TestCase):
    def setUp(self):
        self.post = Blog.objects.create(title='Writing a CV', author='Editor', content='Keep it short.',
                                        tags=' Career , CV ')

    def test_list(self):
        resp = self.client.get(reverse('blogs:blog_list'))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([b['title'] for b in resp.json()], ['Writing a CV'])

    def test_detail(self):
        resp = self.client.get(reverse('blogs:blog_detail', args=[self.post.id]))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['tags'], ['career', 'cv'])

    def test_missing_is_404(self):
        resp = self.client.get(reverse('blogs:blog_detail', args=[999]))
        self.assertEqual(resp.status_code, 404)

    def test_read_only(self):
        resp = self.client.post(reverse('blogs:blog_list'), data='{}', content_type='application/json')
        self.assertEqual(resp.status_code, 405)


class ImportBlogsCommandTest(TestCase):
    def write_json(self, data):
        fd, path = tempfile.mkstemp(suffix='.json')
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(data, f)
        self.addCleanup(os.unlink, path)
        return path

    def test_import_creates_and_skips(self):
        path = self.write_json([
            {'title': 'Interview tips', 'author': 'A', 'content': 'Prepare.', 'tags': ['Tips'], 'image': 'x.png'},
            {'title': '', 'content': 'no title'},
            {'title': 'Interview tips', 'content': 'Duplicate'},
        ])
        out = StringIO()
        call_command('import_blogs', path, stdout=out, stderr=StringIO())
        self.assertEqual(Blog.objects.count(), 1)
        blog = Blog.objects.get()
        self.assertEqual(blog.content, 'Prepare.')
        self.assertEqual(blog.details, {'image': 'x.png'})
        self.assertIn('Created=1, Updated=0, Skipped=2', out.getvalue())

    def test_update_flag(self):
        Blog.objects.create(title='Interview tips', content='old')
        path = self.write_json([{'title': 'Interview tips', 'content': 'new'}])
        call_command('import_blogs', path, '--update', stdout=StringIO())
        self.assertEqual(Blog.objects.get().content, 'new')

    def test_missing_file(self):
        with self.assertRaises(CommandError):
            call_command('import_blogs', '/nonexistent/blogs.json')

    def test_root_must_be_list(self):
        path = self.write_json({'title': 'x'})
        with self.assertRaises(CommandError):
            call_command('import_blogs', path)
