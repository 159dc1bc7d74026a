"""
WSGI config for MachineLicenseService project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "MachineLicenseService.settings.dev")

application = get_wsgi_application()
