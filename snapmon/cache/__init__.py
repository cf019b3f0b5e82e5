"""
State kept between collection cycles.
"""
