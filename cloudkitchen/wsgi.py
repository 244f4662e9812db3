"""
WSGI config for cloudkitchen project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'cloudkitchen.settings')

application = get_wsgi_application()
