"""
WSGI config for taxpaddy project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'taxpaddy.settings')

application = get_wsgi_application()
