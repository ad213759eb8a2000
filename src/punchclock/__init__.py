"""punchclock package.

Attendance (punch in/out) and leave workflow service. Organised by feature
module with a thin Flask controller layer over service/repository layers.
"""
