# jobs/views.py
import json
import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from accounts.decorators import token_required, identity_mismatch
from .forms import JobForm, ApplicationForm
from .models import Job, Application
from .query import QueryError, fetch_jobs, count_jobs

logger = logging.getLogger(__name__)


def _error(message, status):
    return JsonResponse({'message': message}, status=status)


def _form_errors(form):
    return JsonResponse({'message': 'Invalid data', 'errors': form.errors.get_json_data()}, status=400)


def _read_json(request):
    """Decoded JSON object from the body, or None if it is not one."""
    try:
        payload = json.loads(request.body.decode('utf-8') or '{}')
    except (UnicodeDecodeError, ValueError):
        return None
    return payload if isinstance(payload, dict) else None


def _jobs_json(jobs):
    return JsonResponse([job.as_json() for job in jobs], safe=False)


# -------------------------
# Job CRUD
# -------------------------
@csrf_exempt
@require_http_methods(["GET", "POST"])
def job_collection(request):
    if request.method == 'GET':
        return _jobs_json(Job.objects.order_by('pk'))

    payload = _read_json(request)
    if payload is None:
        return _error("Invalid JSON", 400)
    form = JobForm(payload)
    if not form.is_valid():
        return _form_errors(form)
    job = form.save()
    logger.info("Job %s created by %s", job.id, job.owner_email)
    return JsonResponse(job.as_json(), status=201)


@csrf_exempt
@require_http_methods(["GET", "PATCH", "DELETE"])
def job_detail(request, job_id):
    try:
        job = Job.objects.get(pk=job_id)
    except Job.DoesNotExist:
        return _error("Job not found", 404)

    if request.method == 'GET':
        return JsonResponse(job.as_json())

    if request.method == 'DELETE':
        job.delete()
        logger.info("Job %s deleted", job_id)
        return JsonResponse({'deleted': 1})

    payload = _read_json(request)
    if payload is None:
        return _error("Invalid JSON", 400)
    form = JobForm(payload, instance=job)
    if not form.is_valid():
        return _form_errors(form)
    job = form.save()
    logger.info("Job %s updated (%s)", job.id, ', '.join(sorted(payload)) or 'no fields')
    return JsonResponse(job.as_json())


@require_http_methods(["GET"])
def featured_jobs(request):
    jobs = Job.objects.order_by('-applicant_count', 'pk')[:settings.FEATURED_JOBS_LIMIT]
    return _jobs_json(jobs)


@require_http_methods(["GET"])
@token_required
def jobs_by_owner(request, email):
    forbidden = identity_mismatch(request, email)
    if forbidden:
        return forbidden
    return _jobs_json(Job.objects.filter(owner_email=email).order_by('pk'))


# -------------------------
# Paginated search
# -------------------------
@require_http_methods(["GET"])
def all_jobs(request):
    """
    Paginated listing: ?search= (title substring), ?filter= (category),
    ?sort=asc|desc (deadline), ?page= and ?size=.
    """
    try:
        jobs = fetch_jobs(Job.objects.all(), request.GET)
    except QueryError as e:
        return _error(str(e), 400)
    return _jobs_json(jobs)


@require_http_methods(["GET"])
def jobs_count(request):
    return JsonResponse({'count': count_jobs(Job.objects.all(), request.GET)})


# -------------------------
# Applications
# -------------------------
@csrf_exempt
@require_http_methods(["GET", "POST"])
def application_collection(request):
    if request.method == 'GET':
        apps = Application.objects.order_by('pk')
        return JsonResponse([a.as_json() for a in apps], safe=False)

    payload = _read_json(request)
    if payload is None:
        return _error("Invalid JSON", 400)
    form = ApplicationForm(payload)
    if not form.is_valid():
        return _form_errors(form)

    try:
        job = Job.objects.get(pk=form.cleaned_data['job_id'])
    except Job.DoesNotExist:
        return _error("Job not found", 404)

    application = form.build(job)
    # the unique constraint on (applicant_email, job) decides duplicates
    try:
        with transaction.atomic():
            application.save()
    except IntegrityError:
        logger.info("Duplicate application by %s for job %s", application.applicant_email, job.id)
        return _error("You have already applied for this job.", 400)

    logger.info("Application %s submitted by %s for job %s", application.id, application.applicant_email, job.id)
    return JsonResponse(application.as_json(), status=201)


@require_http_methods(["GET"])
@token_required
def my_applications(request):
    email = request.GET.get('email', '')
    forbidden = identity_mismatch(request, email)
    if forbidden:
        return forbidden
    apps = Application.objects.filter(applicant_email=email)
    category = request.GET.get('category')
    if category:
        apps = apps.filter(category=category)
    return JsonResponse([a.as_json() for a in apps.order_by('pk')], safe=False)
