"""
Render a TestResult, stored as JSON, as a text report
"""

from argparse import ArgumentError, ArgumentParser, Namespace, _SubParsersAction
import os.path

import msgspec

from testrunreport.printer import BufferingPrinter
from testrunreport.reporting import info, warning
from testrunreport.resultprinter import ResultPrinter, ResultPrinterConfiguration
from testrunreport.testresult import TestResult

def run(parser: ArgumentParser, args: Namespace, remaining: list[str]) -> int:
    """
    Run this command.
    """
    if len(remaining):
        parser.print_help()
        return 0

    try:
        result = TestResult.load(args.in_file)
    except msgspec.DecodeError as e:
        raise ArgumentError(None, f'Cannot read test result from { args.in_file }: { e }')

    info('Loaded', result, 'from', args.in_file)

    if args.out and os.path.exists(args.out):
        warning(f'Overwriting existing file { args.out }')

    configuration = ResultPrinterConfiguration(
            display_details_on_incomplete_tests=args.display_incomplete,
            display_details_on_skipped_tests=args.display_skipped,
            colorize_output=args.colors,
            display_defects_in_reverse_order=args.reverse_list)

    result_printer = ResultPrinter(BufferingPrinter.to_destination(args.out), configuration)
    result_printer.print_result(result)
    result_printer.flush()

    if args.exit_zero or result.was_successful():
        return 0
    return 1


def add_sub_parser(parent_parser: _SubParsersAction, cmd_name: str) -> ArgumentParser:
    """
    Add command-line options for this sub-command
    parent_parser: the parent argparse parser
    cmd_name: name of this command
    """
    parser = parent_parser.add_parser(cmd_name, help='Render a test result as a text report')
    parser.add_argument('--in', required=True, dest='in_file', help='JSON file containing the test result')
    parser.add_argument('--out', required=False,
                        help='Write the report to the provided file instead of stdout')
    parser.add_argument('--colors', action='store_true', default=False,
                        help='Use colors in the footer of the report')
    parser.add_argument('--display-incomplete', action='store_true', default=False,
                        help='List the incomplete tests')
    parser.add_argument('--display-skipped', action='store_true', default=False,
                        help='List the skipped tests')
    parser.add_argument('--reverse-list', action='store_true', default=False,
                        help='List defects in reverse order')
    parser.add_argument('--exit-zero', action='store_true', default=False,
                        help='Exit with status 0 even if the test run was not successful')

    return parser
