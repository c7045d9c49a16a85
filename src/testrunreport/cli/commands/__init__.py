"""
The sub-commands of the testrunreport CLI. Each module provides add_sub_parser() and run().
"""
