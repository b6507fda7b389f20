from django.http import HttpResponse


def health_check(request):
    """Liveness probe for the API server."""
    return HttpResponse("<h1>API is up and running!</h1>", status=200)
