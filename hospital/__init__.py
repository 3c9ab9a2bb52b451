"""Hospital application of the SIMRS backend.

Contains the models, storage backends, domain services, serializers,
views and route registrations behind the ``/api/`` surface.
"""
