"""Users app package.

This module defines the platform's custom user model with two roles
(``user`` and ``admin``), email based authentication and JWT issuing.
Use ``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
