# care/management/commands/runserver.py
from django.conf import settings
from django.contrib.staticfiles.management.commands.runserver import Command as StaticRunserverCommand


class Command(StaticRunserverCommand):
    """``runserver`` listening on ``SERVER_PORT`` unless told otherwise."""
    default_port = str(settings.SERVER_PORT)
