"""
Writers that ship a cycle's samples to their destination.
"""
