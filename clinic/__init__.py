"""
The ``clinic`` application: hospital records and the REST API over them.

Patients, doctors, appointments, admissions, pharmacy stock, lab reports,
the staff roster and billing all live here.  Every list endpoint funnels
through :mod:`clinic.listquery`, so search, filtering and pagination
behave the same on every screen.
"""
