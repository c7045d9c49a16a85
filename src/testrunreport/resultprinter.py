"""
Renders the outcome of a finished test run as a human-readable text report.

The report consists of one section per category of defect (errors, failures, risky tests,
and optionally incomplete and skipped tests), each listing the affected tests, followed by
a footer with the overall status and the counts.
"""

from dataclasses import dataclass
from typing import Callable

import msgspec

from testrunreport.color import Colorizer, StatusColor
from testrunreport.printer import Printer, StringPrinter
from testrunreport.reporting import trace
from testrunreport.testresult import BeforeFirstTestMethodErrored, OtherTest, Test, TestErrored, TestMethod, TestResult
from testrunreport.utils import plural

SECTION_SEPARATOR = '\n--\n\n'
ASSERTION_ERROR_PREFIX = 'AssertionError: '
_TRIM_CHARACTERS = ' \t\n\r\0\x0b'


class ResultPrinterError(RuntimeError):
    """
    Thrown if a ResultPrinter is used incorrectly.
    """


class ResultPrinterConfiguration(msgspec.Struct, frozen=True):
    """
    The switches that influence what the report looks like.
    """
    display_details_on_incomplete_tests: bool = False
    display_details_on_skipped_tests: bool = False
    colorize_output: bool = False
    display_defects_in_reverse_order: bool = False


class ReportItem(msgspec.Struct, frozen=True):
    """
    One numbered entry in a section of the report.
    """
    title: str
    body: str


def _name(test: Test) -> str:
    match test:
        case TestMethod():
            return test.name_with_class
        case OtherTest():
            return test.name
    raise AssertionError(f'Not a test: { repr(test) }')


def _error_items(result: TestResult) -> list[ReportItem]:
    ret = []
    for event in result.test_errored_events:
        match event:
            case BeforeFirstTestMethodErrored():
                title = event.test_class_name
            case TestErrored():
                title = _name(event.test)
            case _:
                raise AssertionError(f'Not an error event: { repr(event) }')
        ret.append(ReportItem(title, event.throwable.as_string()))
    return ret


def _warning_items(result: TestResult) -> list[ReportItem]:
    # Tests that passed with a warning are only counted in the footer, never listed.
    return []


def _failure_items(result: TestResult) -> list[ReportItem]:
    ret = []
    for event in result.test_failed_events:
        body = event.throwable.as_string()
        if body.startswith(ASSERTION_ERROR_PREFIX):
            body = body[len(ASSERTION_ERROR_PREFIX):]
        ret.append(ReportItem(_name(event.test), body))
    return ret


def _risky_items(result: TestResult) -> list[ReportItem]:
    """
    One item per reason, not per test.
    """
    ret = []
    for reasons in result.test_considered_risky_events:
        for reason in reasons:
            body = reason.message + '\n'
            match reason.test:
                case TestMethod():
                    body += f'\n{ reason.test.file }:{ reason.test.line }\n'
                case OtherTest():
                    pass
                case _:
                    raise AssertionError(f'Not a test: { repr(reason.test) }')
            ret.append(ReportItem(_name(reason.test), body))
    return ret


def _incomplete_items(result: TestResult) -> list[ReportItem]:
    return [ ReportItem(_name(event.test), event.throwable.as_string()) for event in result.test_marked_incomplete_events ]


def _skipped_items(result: TestResult) -> list[ReportItem]:
    return [ ReportItem(_name(event.test), event.message) for event in result.test_skipped_events ]


@dataclass(frozen=True)
class _Section:
    """
    Knows how to find and introduce the items of one category in a TestResult.
    """
    name: str
    is_enabled: Callable[[ResultPrinterConfiguration], bool]
    is_present: Callable[[TestResult], bool]
    build_items: Callable[[TestResult], list[ReportItem]]
    print_header: Callable[['ResultPrinter', TestResult, list[ReportItem]], None]


def _noun_header(noun: str) -> Callable[['ResultPrinter', TestResult, list[ReportItem]], None]:
    return lambda printer, result, items: printer._print_list_header(len(items), noun)


def _risky_header(printer: 'ResultPrinter', result: TestResult, items: list[ReportItem]) -> None:
    printer._print_risky_list_header(result.number_of_tests_with_test_considered_risky_events(), len(items))


SECTIONS : list[_Section] = [
    _Section('errors',
             lambda config: True,
             TestResult.has_test_errored_events,
             _error_items,
             _noun_header('error')),
    _Section('warnings',
             lambda config: True,
             TestResult.has_test_passed_with_warning_events,
             _warning_items,
             _noun_header('warning')),
    _Section('failures',
             lambda config: True,
             TestResult.has_test_failed_events,
             _failure_items,
             _noun_header('failure')),
    _Section('risky',
             lambda config: True,
             TestResult.has_test_considered_risky_events,
             _risky_items,
             _risky_header),
    _Section('incomplete',
             lambda config: config.display_details_on_incomplete_tests,
             TestResult.has_test_marked_incomplete_events,
             _incomplete_items,
             _noun_header('incomplete test')),
    _Section('skipped',
             lambda config: config.display_details_on_skipped_tests,
             TestResult.has_test_skipped_events,
             _skipped_items,
             _noun_header('skipped test')),
]


class ResultPrinter:
    """
    Prints the report for one TestResult to a Printer.

    A ResultPrinter keeps track of what it has printed so far, so it can put separators
    between sections and delimiters between counts. Use a new instance for each report,
    or call reset() in between.
    """
    def __init__(self, printer: Printer, configuration: ResultPrinterConfiguration | None = None):
        self._printer = printer
        self._configuration = configuration or ResultPrinterConfiguration()
        self._colorizer = Colorizer(self._configuration.colorize_output)
        self.reset()


    @property
    def configuration(self) -> ResultPrinterConfiguration:
        return self._configuration


    def reset(self) -> None:
        self._list_printed = False
        self._count_printed = False
        self._result_printed = False


    def print_result(self, result: TestResult) -> None:
        if self._result_printed:
            raise ResultPrinterError('This ResultPrinter has already printed a result. Use a new one, or reset() it.')
        self._result_printed = True

        for section in SECTIONS:
            if not section.is_enabled(self._configuration):
                continue
            if not section.is_present(result):
                continue
            items = section.build_items(result)
            if not items:
                continue

            trace('Printing section', section.name, 'with', len(items), 'items')
            section.print_header(self, result, items)
            self._print_list(items)

        self._print_footer(result)


    def flush(self) -> None:
        self._printer.flush()


    def _print_list_header(self, number_of_tests: int, noun: str) -> None:
        self._print_section_separator_if_needed()
        self._printer.print(f"There { plural(number_of_tests, 'was', 'were') } { number_of_tests } { plural(number_of_tests, noun) }:\n")


    def _print_risky_list_header(self, number_of_tests: int, number_of_reasons: int) -> None:
        self._print_section_separator_if_needed()
        self._printer.print(
                f"{ number_of_tests } { plural(number_of_tests, 'test') } { plural(number_of_tests, 'is', 'are') }"
                + f" considered risky for { number_of_reasons } { plural(number_of_reasons, 'reason') }:\n")


    def _print_section_separator_if_needed(self) -> None:
        if self._list_printed:
            self._printer.print(SECTION_SEPARATOR)
        self._list_printed = True


    def _print_list(self, items: list[ReportItem]) -> None:
        if self._configuration.display_defects_in_reverse_order:
            items = list(reversed(items))

        for number, item in enumerate(items, start=1):
            self._print_list_element(number, item)


    def _print_list_element(self, number: int, item: ReportItem) -> None:
        self._printer.print(f'\n{ number }) { item.title }\n{ item.body.strip(_TRIM_CHARACTERS) }\n')


    def _print_footer(self, result: TestResult) -> None:
        n_tests = result.number_of_tests_run
        n_assertions = result.number_of_assertions

        if n_tests == 0:
            trace('Footer: no tests executed')
            self._print_with_color(StatusColor.WARNING, 'No tests executed!')
            return

        if result.was_successful_and_no_test_is_risky_or_skipped_or_incomplete():
            trace('Footer: success')
            self._print_with_color(
                    StatusColor.SUCCESS,
                    f"OK ({ n_tests } { plural(n_tests, 'test') }, { n_assertions } { plural(n_assertions, 'assertion') })")
            return

        color = StatusColor.WARNING

        if result.was_successful():
            trace('Footer: success with incomplete, skipped, or risky tests')
            if (self._configuration.display_details_on_incomplete_tests
                    or self._configuration.display_details_on_skipped_tests
                    or result.has_test_considered_risky_events()):
                self._printer.print('\n')

            self._print_with_color(color, 'OK, but incomplete, skipped, or risky tests!')

        else:
            self._printer.print('\n')

            if result.has_test_errored_events():
                trace('Footer: errors')
                color = StatusColor.ERROR
                self._print_with_color(color, 'ERRORS!')
            elif result.has_test_failed_events():
                trace('Footer: failures')
                color = StatusColor.ERROR
                self._print_with_color(color, 'FAILURES!')
            elif result.has_test_passed_with_warning_events():
                trace('Footer: warnings')
                self._print_with_color(color, 'WARNINGS!')

        self._print_count(n_tests, 'Tests', color, True)
        self._print_count(n_assertions, 'Assertions', color, True)
        self._print_count(result.number_of_test_errored_events(), 'Errors', color)
        self._print_count(result.number_of_test_failed_events(), 'Failures', color)
        self._print_count(result.number_of_test_passed_with_warning_events(), 'Warnings', color)
        self._print_count(result.number_of_test_skipped_events(), 'Skipped', color)
        self._print_count(result.number_of_test_marked_incomplete_events(), 'Incomplete', color)
        self._print_count(result.number_of_tests_with_test_considered_risky_events(), 'Risky', color)
        self._print_with_color(color, '.')


    def _print_count(self, count: int, name: str, color: StatusColor, always: bool = False) -> None:
        if not always and count <= 0:
            return
        delimiter = ', ' if self._count_printed else ''
        self._print_with_color(color, f'{ delimiter }{ name }: { count }', False)
        self._count_printed = True


    def _print_with_color(self, color: StatusColor, buffer: str, lf: bool = True) -> None:
        self._printer.print(self._colorizer.colorize(color, buffer))
        if lf:
            self._printer.print('\n')


def render_result(result: TestResult, configuration: ResultPrinterConfiguration | None = None) -> str:
    """
    Return the report for result as a string, rendered by a fresh ResultPrinter.
    """
    string_printer = StringPrinter()
    result_printer = ResultPrinter(string_printer, configuration)
    result_printer.print_result(result)
    result_printer.flush()
    return string_printer.as_string()
