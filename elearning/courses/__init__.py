"""
E-Learning Courses Package

Course catalogue (courses and lessons), its serializers and read-only API
views, plus the built-in catalogue used by the `seed_courses` command.
"""
