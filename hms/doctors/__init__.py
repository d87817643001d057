"""
Doctor module: doctor profiles and weekly schedules, managed by administrators.
"""
