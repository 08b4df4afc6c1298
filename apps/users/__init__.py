"""Users app package.

Defines the custom user model with its student, lecturer and staff
roles, plus registration, login and password endpoints. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
