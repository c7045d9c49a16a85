"""
Show version
"""

from argparse import ArgumentParser, Namespace, _SubParsersAction

from testrunreport.utils import TESTRUNREPORT_VERSION

def run(parser: ArgumentParser, args: Namespace, remaining: list[str]) -> int:
    """
    Run this command.
    """
    if len(remaining):
        parser.print_help()
        return 0

    print(TESTRUNREPORT_VERSION)
    return 0


def add_sub_parser(parent_parser: _SubParsersAction, cmd_name: str) -> ArgumentParser:
    """
    Add command-line options for this sub-command
    parent_parser: the parent argparse parser
    cmd_name: name of this command
    """
    parser = parent_parser.add_parser( cmd_name, help='Show testrunreport version')

    return parser
