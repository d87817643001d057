"""
Hospital management backend.

Identity and access (registration, login, bearer tokens, role checks) plus
transactional management of doctor profiles and their weekly schedules.
"""
