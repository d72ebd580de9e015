# blogs/views.py
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from .models import Blog


@require_http_methods(["GET"])
def blog_list(request):
    return JsonResponse([b.as_json() for b in Blog.objects.all()], safe=False)


@require_http_methods(["GET"])
def blog_detail(request, pk):
    try:
        blog = Blog.objects.get(pk=pk)
    except Blog.DoesNotExist:
        return JsonResponse({'message': 'Blog not found'}, status=404)
    return JsonResponse(blog.as_json())
