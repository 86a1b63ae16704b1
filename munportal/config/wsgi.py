"""
WSGI config for the MUN Portal project.

It exposes the WSGI callable as a module-level variable named ``application``.
"""

import json
import logging
import os
import subprocess
from pathlib import Path

logger = logging.getLogger("config")

# --- Load Elastic Beanstalk environment vars before Django settings ---
eb_get_config = Path("/opt/elasticbeanstalk/bin/get-config")

if eb_get_config.exists():
    try:
        output = subprocess.check_output([str(eb_get_config), "environment"])
        env_data = json.loads(output.decode().strip())
        for k, v in env_data.items():
            os.environ.setdefault(k, v)
    except (subprocess.CalledProcessError, ValueError) as e:
        logger.error("Failed to load EB environment variables: %s", e)

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

from django.core.wsgi import get_wsgi_application  # noqa: E402

application = get_wsgi_application()
