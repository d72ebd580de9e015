# jobs/tests.py
import json
from datetime import datetime, timedelta, timezone as dt_timezone
from unittest import mock

from django.db import DatabaseError
from django.http import QueryDict
from django.test import TestCase, override_settings
from django.urls import reverse

from accounts.tokens import issue_token
from .models import Job, Application
from .query import QueryError, parse_window, fetch_jobs, count_jobs, build_job_ordering

BASE_DEADLINE = datetime(2030, 1, 1, tzinfo=dt_timezone.utc)


def make_job(title='Backend Engineer', category='IT', days=0, applicants=0, owner='poster@example.com', **details):
    return Job.objects.create(
        title=title,
        category=category,
        deadline=BASE_DEADLINE + timedelta(days=days),
        applicant_count=applicants,
        owner_email=owner,
        details=details,
    )


def login_as(client, email):
    client.cookies['token'] = issue_token({'email': email})


class JobCrudTest(TestCase):
    def test_create_keeps_extra_fields(self):
        payload = {
            'title': 'Data Engineer',
            'category': 'IT',
            'deadline': '2030-02-01T12:00:00+00:00',
            'owner_email': 'poster@example.com',
            'salary': '100k',
            'description': 'Pipelines',
        }
        resp = self.client.post(reverse('jobs:job_collection'), data=json.dumps(payload),
                                content_type='application/json')
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body['title'], 'Data Engineer')
        self.assertEqual(body['salary'], '100k')
        self.assertEqual(body['applicant_count'], 0)
        self.assertEqual(body['status'], 'open')
        job = Job.objects.get(pk=body['id'])
        self.assertEqual(job.details, {'salary': '100k', 'description': 'Pipelines'})

    def test_create_requires_title_and_owner(self):
        resp = self.client.post(reverse('jobs:job_collection'), data=json.dumps({'category': 'IT'}),
                                content_type='application/json')
        self.assertEqual(resp.status_code, 400)
        self.assertIn('title', resp.json()['errors'])
        self.assertEqual(Job.objects.count(), 0)

    def test_create_rejects_invalid_json(self):
        resp = self.client.post(reverse('jobs:job_collection'), data='{', content_type='application/json')
        self.assertEqual(resp.status_code, 400)

    def test_list_all(self):
        make_job(title='A')
        make_job(title='B')
        resp = self.client.get(reverse('jobs:job_collection'))
        self.assertEqual([j['title'] for j in resp.json()], ['A', 'B'])

    def test_detail(self):
        job = make_job(title='Frontend Engineer')
        resp = self.client.get(reverse('jobs:job_detail', args=[job.id]))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['title'], 'Frontend Engineer')

    def test_detail_missing_is_404(self):
        resp = self.client.get(reverse('jobs:job_detail', args=[999]))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()['message'], 'Job not found')

    def test_patch_changes_only_supplied_fields(self):
        job = make_job(title='Ops', applicants=2, team='infra')
        resp = self.client.patch(reverse('jobs:job_detail', args=[job.id]),
                                 data=json.dumps({'status': 'closed', 'applicant_count': 5}),
                                 content_type='application/json')
        self.assertEqual(resp.status_code, 200)
        job.refresh_from_db()
        self.assertEqual(job.status, 'closed')
        self.assertEqual(job.applicant_count, 5)
        self.assertEqual(job.title, 'Ops')
        self.assertEqual(job.deadline, BASE_DEADLINE)
        self.assertEqual(job.details, {'team': 'infra'})

    def test_patch_rejects_negative_applicant_count(self):
        job = make_job(applicants=2)
        resp = self.client.patch(reverse('jobs:job_detail', args=[job.id]),
                                 data=json.dumps({'applicant_count': -1}),
                                 content_type='application/json')
        self.assertEqual(resp.status_code, 400)
        job.refresh_from_db()
        self.assertEqual(job.applicant_count, 2)

    def test_patch_null_applicant_count_keeps_stored_value(self):
        job = make_job(applicants=7)
        resp = self.client.patch(reverse('jobs:job_detail', args=[job.id]),
                                 data=json.dumps({'applicant_count': None, 'status': 'closed'}),
                                 content_type='application/json')
        self.assertEqual(resp.status_code, 200)
        job.refresh_from_db()
        self.assertEqual(job.applicant_count, 7)
        self.assertEqual(job.status, 'closed')

    def test_patch_missing_is_404(self):
        resp = self.client.patch(reverse('jobs:job_detail', args=[999]), data=json.dumps({'status': 'x'}),
                                 content_type='application/json')
        self.assertEqual(resp.status_code, 404)

    def test_delete(self):
        job = make_job()
        resp = self.client.delete(reverse('jobs:job_detail', args=[job.id]))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {'deleted': 1})
        self.assertEqual(self.client.get(reverse('jobs:job_detail', args=[job.id])).status_code, 404)

    def test_delete_leaves_applications(self):
        job = make_job()
        Application.objects.create(applicant_email='a@example.com', job=job, category='IT')
        self.client.delete(reverse('jobs:job_detail', args=[job.id]))
        self.assertEqual(Application.objects.filter(job_id=job.id).count(), 1)

    def test_featured_returns_top_three_by_applicants(self):
        for n in (5, 1, 9, 3, 7):
            make_job(title=f'job-{n}', applicants=n)
        resp = self.client.get(reverse('jobs:featured_jobs'))
        self.assertEqual([j['applicant_count'] for j in resp.json()], [9, 7, 5])

    def test_store_error_is_generic_500(self):
        with mock.patch('jobs.views.Job.objects.order_by', side_effect=DatabaseError('secret dsn')):
            with self.assertLogs('jobboard.middleware', level='ERROR'):
                resp = self.client.get(reverse('jobs:job_collection'))
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {'message': 'Internal server error'})
        self.assertNotIn(b'secret dsn', resp.content)


class JobsByOwnerTest(TestCase):
    def setUp(self):
        make_job(title='Mine 1', owner='a@example.com')
        make_job(title='Mine 2', owner='a@example.com')
        make_job(title='Theirs', owner='b@example.com')

    def test_without_cookie_is_unauthenticated(self):
        with self.assertNumQueries(0):
            resp = self.client.get(reverse('jobs:jobs_by_owner', args=['a@example.com']))
        self.assertEqual(resp.status_code, 401)

    def test_other_identity_is_forbidden(self):
        login_as(self.client, 'a@example.com')
        resp = self.client.get(reverse('jobs:jobs_by_owner', args=['b@example.com']))
        self.assertEqual(resp.status_code, 403)

    def test_forbidden_even_when_identity_unknown(self):
        login_as(self.client, 'a@example.com')
        resp = self.client.get(reverse('jobs:jobs_by_owner', args=['ghost@example.com']))
        self.assertEqual(resp.status_code, 403)

    def test_own_listings(self):
        login_as(self.client, 'a@example.com')
        resp = self.client.get(reverse('jobs:jobs_by_owner', args=['a@example.com']))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([j['title'] for j in resp.json()], ['Mine 1', 'Mine 2'])


class WindowParsingTest(TestCase):
    def test_defaults_when_missing(self):
        window = parse_window(QueryDict(''))
        self.assertEqual((window.page, window.size, window.skip), (1, 10, 0))

    def test_defaults_when_not_numeric(self):
        window = parse_window(QueryDict('page=abc&size=NaN'))
        self.assertEqual((window.page, window.size), (1, 10))

    def test_skip(self):
        self.assertEqual(parse_window(QueryDict('page=3&size=7')).skip, 14)

    def test_page_beyond_largest_offset_rejected(self):
        with self.assertRaises(QueryError):
            parse_window(QueryDict('page=99999999999999999999&size=5'))
        last = (2 ** 63 - 1) // 5
        self.assertEqual(parse_window(QueryDict(f'page={last}&size=5')).page, last)

    def test_out_of_range_rejected(self):
        for qs in ('page=0', 'size=0', 'page=-2', 'size=101'):
            with self.subTest(qs=qs):
                with self.assertRaises(QueryError):
                    parse_window(QueryDict(qs))

    @override_settings(JOBS_PAGE_SIZE=4)
    def test_configured_default_size(self):
        self.assertEqual(parse_window(QueryDict('')).size, 4)

    def test_ordering(self):
        self.assertEqual(build_job_ordering(None), ('pk',))
        self.assertEqual(build_job_ordering('asc'), ('deadline', 'pk'))
        self.assertEqual(build_job_ordering('desc'), ('-deadline', 'pk'))
        self.assertEqual(build_job_ordering('newest'), ('-deadline', 'pk'))


class AllJobsQueryTest(TestCase):
    """12 listings; 8 have 'engineer' in the title and category IT."""

    def setUp(self):
        # matching rows, inserted out of deadline order
        for i, day in enumerate([7, 2, 5, 0, 6, 1, 4, 3]):
            title = ['Software Engineer', 'ENGINEER II', 'Platform engineer', 'Engineering Lead'][i % 4]
            make_job(title=f'{title} #{day}', category='IT', days=day)
        make_job(title='Support Engineer', category='Support', days=8)
        make_job(title='Engineer Manager', category='HR', days=9)
        make_job(title='Designer', category='IT', days=10)
        make_job(title='Accountant', category='Finance', days=11)

    def get(self, **params):
        return self.client.get(reverse('jobs:all_jobs'), params)

    def test_search_filter_sort_page_scenario(self):
        resp = self.get(search='engineer', filter='IT', sort='asc', page=2, size=5)
        self.assertEqual(resp.status_code, 200)
        days = [(datetime.fromisoformat(j['deadline']) - BASE_DEADLINE).days for j in resp.json()]
        # positions 6..8 of the 8 matches, ascending deadline
        self.assertEqual(days, [5, 6, 7])

    def test_descending_sort(self):
        resp = self.get(search='engineer', filter='IT', sort='desc', page=1, size=3)
        days = [(datetime.fromisoformat(j['deadline']) - BASE_DEADLINE).days for j in resp.json()]
        self.assertEqual(days, [7, 6, 5])

    def test_unsorted_uses_insertion_order(self):
        resp = self.get(filter='IT', page=1, size=3)
        ids = [j['id'] for j in resp.json()]
        self.assertEqual(ids, sorted(ids))

    def test_search_is_case_insensitive_substring(self):
        resp = self.get(search='ENGINEER', size=100)
        self.assertEqual(len(resp.json()), 10)

    def test_missing_search_matches_everything(self):
        resp = self.get(size=100)
        self.assertEqual(len(resp.json()), 12)

    def test_search_is_literal(self):
        make_job(title='100% Remote Engineer', category='IT')
        resp = self.get(search='%', size=100)
        self.assertEqual([j['title'] for j in resp.json()], ['100% Remote Engineer'])
        self.assertEqual(self.get(search='.*', size=100).json(), [])

    def test_window_length(self):
        total = 8
        for size in (1, 3, 5, 8, 10):
            for page in (1, 2, 3, 9):
                with self.subTest(page=page, size=size):
                    resp = self.get(search='engineer', filter='IT', page=page, size=size)
                    skip = (page - 1) * size
                    self.assertEqual(len(resp.json()), min(size, max(0, total - skip)))

    def test_malformed_paging_falls_back(self):
        resp = self.get(page='two', size='lots')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()), 10)

    def test_out_of_range_paging_is_400(self):
        self.assertEqual(self.get(page=0).status_code, 400)
        self.assertEqual(self.get(size=500).status_code, 400)
        self.assertEqual(self.get(page='99999999999999999999', size=5).status_code, 400)
        self.assertEqual(self.client.get(reverse('jobs:jobs_count'), {'page': '99999999999999999999'}).status_code, 200)

    def test_count_matches_unbounded_fetch(self):
        for params in ({}, {'filter': 'IT'}, {'search': 'engineer'}, {'search': 'engineer', 'filter': 'IT'},
                       {'search': 'nothing-like-this'}):
            with self.subTest(params=params):
                count = self.client.get(reverse('jobs:jobs_count'), params).json()['count']
                fetched = self.get(page=1, size=100, **params).json()
                self.assertEqual(count, len(fetched))

    def test_count_ignores_window(self):
        resp = self.client.get(reverse('jobs:jobs_count'), {'search': 'engineer', 'filter': 'IT', 'page': 2, 'size': 1})
        self.assertEqual(resp.json(), {'count': 8})

    def test_query_functions_take_queryset(self):
        subset = Job.objects.filter(category='IT')
        params = QueryDict('search=designer')
        self.assertEqual(count_jobs(subset, params), 1)
        self.assertEqual([j.title for j in fetch_jobs(subset, params)], ['Designer'])


class ApplicationTest(TestCase):
    def setUp(self):
        self.job = make_job(title='Backend Engineer', category='IT')

    def apply(self, **payload):
        body = {'applicant_email': 'a@example.com', 'job_id': self.job.id}
        body.update(payload)
        return self.client.post(reverse('jobs:application_collection'), data=json.dumps(body),
                                content_type='application/json')

    def test_submit(self):
        resp = self.apply(resume_link='https://example.com/cv.pdf')
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body['job_id'], self.job.id)
        self.assertEqual(body['category'], 'IT')
        self.assertEqual(body['resume_link'], 'https://example.com/cv.pdf')

    def test_duplicate_rejected(self):
        self.assertEqual(self.apply().status_code, 201)
        resp = self.apply()
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['message'], 'You have already applied for this job.')
        self.assertEqual(Application.objects.filter(applicant_email='a@example.com', job=self.job).count(), 1)

    def test_other_applicant_can_apply(self):
        self.apply()
        self.assertEqual(self.apply(applicant_email='b@example.com').status_code, 201)

    def test_unknown_job_is_404(self):
        self.assertEqual(self.apply(job_id=999).status_code, 404)

    def test_invalid_email_is_400(self):
        self.assertEqual(self.apply(applicant_email='not-an-email').status_code, 400)

    def test_list_all(self):
        self.apply()
        self.apply(applicant_email='b@example.com')
        resp = self.client.get(reverse('jobs:application_collection'))
        self.assertEqual([a['applicant_email'] for a in resp.json()], ['a@example.com', 'b@example.com'])


class MyApplicationsTest(TestCase):
    def setUp(self):
        it_job = make_job(title='Backend Engineer', category='IT')
        hr_job = make_job(title='Recruiter', category='HR')
        Application.objects.create(applicant_email='a@example.com', job=it_job, category='IT')
        Application.objects.create(applicant_email='a@example.com', job=hr_job, category='HR')
        Application.objects.create(applicant_email='b@example.com', job=it_job, category='IT')

    def get(self, **params):
        return self.client.get(reverse('jobs:my_applications'), params)

    def test_without_cookie_never_reaches_store(self):
        with self.assertNumQueries(0):
            resp = self.get(email='a@example.com')
        self.assertEqual(resp.status_code, 401)

    def test_other_identity_is_forbidden(self):
        login_as(self.client, 'a@example.com')
        self.assertEqual(self.get(email='b@example.com').status_code, 403)
        self.assertEqual(self.get().status_code, 403)

    def test_own_applications(self):
        login_as(self.client, 'a@example.com')
        resp = self.get(email='a@example.com')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(sorted(a['category'] for a in resp.json()), ['HR', 'IT'])

    def test_category_filter(self):
        login_as(self.client, 'a@example.com')
        resp = self.get(email='a@example.com', category='HR')
        self.assertEqual([a['category'] for a in resp.json()], ['HR'])

    def test_cookie_from_jwt_endpoint(self):
        self.client.post(reverse('accounts:issue_jwt'), data=json.dumps({'email': 'b@example.com'}),
                         content_type='application/json')
        resp = self.get(email='b@example.com')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()), 1)
