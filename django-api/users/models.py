"""User persistence model.

Authentication itself is delegated to Django; this model only fixes the
primary key to a UUID so user identities share the format of other ids.
"""

import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Organizer, buyer and comment author."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    def __str__(self) -> str:
        full_name = self.get_full_name()
        return full_name or self.username
