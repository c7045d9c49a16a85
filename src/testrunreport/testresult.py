"""
Classes that represent the finalized outcome of a test run, as consumed by the ResultPrinter.
Instances are immutable; they are produced by whatever ran the tests, either directly in
Python or by loading a JSON file.
"""

import os
import os.path
import traceback
from typing import IO, ClassVar

import msgspec


class TestResultError(RuntimeError):
    """
    Thrown if a TestResult is internally inconsistent.
    """
    def __init__(self, msg: str):
        super().__init__(f'Invalid TestResult: { msg }')


class TestMethod(msgspec.Struct, frozen=True, tag='method'):
    """
    A test that is a method on a test class, with a known source location.
    """
    __test__ : ClassVar[bool] = False # keep pytest from collecting this

    class_name: str
    method_name: str
    file: str
    line: int

    @property
    def is_test_method(self) -> bool:
        return True


    @property
    def name(self) -> str:
        return self.method_name


    @property
    def name_with_class(self) -> str:
        return f'{ self.class_name }::{ self.method_name }'


    def __str__(self):
        return self.name_with_class


class OtherTest(msgspec.Struct, frozen=True, tag='other'):
    """
    Anything that is reported like a test but is not a test method, such as a
    synthetic test or code that runs before the first test method of a class.
    """
    name: str

    @property
    def is_test_method(self) -> bool:
        return False


    def __str__(self):
        return self.name


Test = TestMethod | OtherTest


class Throwable(msgspec.Struct, frozen=True):
    """
    Captures an exception that occurred while running a test. The properties of this class
    are derived from that exception.
    """
    class_name: str
    message: str
    description: str = ''
    stack_trace: str = ''
    previous: 'Throwable | None' = None

    @staticmethod
    def from_exception(exc: BaseException) -> 'Throwable':
        """
        Capture a Python exception, including its chain of causes.
        Frame paths below the current directory are shortened to relative paths.
        """
        pwd = os.path.abspath(os.getcwd()) + os.sep
        frames = []
        for filename, line, _, _ in traceback.extract_tb(exc.__traceback__):
            if filename.startswith(pwd):
                filename = filename[len(pwd):]
            frames.append(f'{ filename }:{ line }')

        cause = exc.__cause__
        if cause is None and not exc.__suppress_context__:
            cause = exc.__context__
        return Throwable(
                type(exc).__name__,
                str(exc).strip(),
                stack_trace='\n'.join(frames),
                previous=Throwable.from_exception(cause) if cause is not None else None)


    def full_description(self) -> str:
        if self.description:
            return self.description
        if self.message:
            return f'{ self.class_name }: { self.message }'
        return self.class_name


    def as_string(self) -> str:
        """
        The description followed by the stack trace and, recursively, the causes.
        """
        ret = self.full_description()
        if self.stack_trace:
            ret += '\n' + self.stack_trace
        if self.previous is not None:
            ret += '\nCaused by\n' + self.previous.as_string()
        return ret


class TestErrored(msgspec.Struct, frozen=True, tag='errored'):
    __test__ : ClassVar[bool] = False # keep pytest from collecting this

    test: Test
    throwable: Throwable


class BeforeFirstTestMethodErrored(msgspec.Struct, frozen=True, tag='before-first-test-method-errored'):
    """
    An error raised by class-level setup code, before any test method of that class could run.
    """
    test_class_name: str
    throwable: Throwable

    @property
    def test(self) -> Test:
        return OtherTest(self.test_class_name)


ErrorEvent = TestErrored | BeforeFirstTestMethodErrored


class TestFailed(msgspec.Struct, frozen=True):
    __test__ : ClassVar[bool] = False # keep pytest from collecting this

    test: Test
    throwable: Throwable


class TestConsideredRisky(msgspec.Struct, frozen=True):
    __test__ : ClassVar[bool] = False # keep pytest from collecting this

    test: Test
    message: str


class TestMarkedIncomplete(msgspec.Struct, frozen=True):
    __test__ : ClassVar[bool] = False # keep pytest from collecting this

    test: Test
    throwable: Throwable


class TestSkipped(msgspec.Struct, frozen=True):
    __test__ : ClassVar[bool] = False # keep pytest from collecting this

    test: Test
    message: str


class TestPassedWithWarning(msgspec.Struct, frozen=True):
    __test__ : ClassVar[bool] = False # keep pytest from collecting this

    test: Test
    message: str


class TestResult(msgspec.Struct, frozen=True):
    """
    Captures the outcome of a finished test run: the counts, and the events of each category
    in the order in which they occurred.
    test_considered_risky_events holds one list of reasons per affected test.
    """
    __test__ : ClassVar[bool] = False # keep pytest from collecting this

    number_of_tests_run: int = 0
    number_of_assertions: int = 0
    test_errored_events: list[ErrorEvent] = []
    test_failed_events: list[TestFailed] = []
    test_considered_risky_events: list[list[TestConsideredRisky]] = []
    test_marked_incomplete_events: list[TestMarkedIncomplete] = []
    test_skipped_events: list[TestSkipped] = []
    test_passed_with_warning_events: list[TestPassedWithWarning] = []

    def __post_init__(self):
        if self.number_of_tests_run < 0:
            raise TestResultError(f'Negative number of tests run: { self.number_of_tests_run }')
        if self.number_of_assertions < 0:
            raise TestResultError(f'Negative number of assertions: { self.number_of_assertions }')
        for i, reasons in enumerate(self.test_considered_risky_events):
            if not reasons:
                raise TestResultError(f'Risky test entry { i } has no reasons')


    def has_test_errored_events(self) -> bool:
        return len(self.test_errored_events) > 0


    def number_of_test_errored_events(self) -> int:
        return len(self.test_errored_events)


    def has_test_failed_events(self) -> bool:
        return len(self.test_failed_events) > 0


    def number_of_test_failed_events(self) -> int:
        return len(self.test_failed_events)


    def has_test_considered_risky_events(self) -> bool:
        return len(self.test_considered_risky_events) > 0


    def number_of_tests_with_test_considered_risky_events(self) -> int:
        return len(self.test_considered_risky_events)


    def number_of_test_considered_risky_events(self) -> int:
        """
        Counts reasons, not tests: one test may be risky for several reasons.
        """
        return sum(len(reasons) for reasons in self.test_considered_risky_events)


    def has_test_marked_incomplete_events(self) -> bool:
        return len(self.test_marked_incomplete_events) > 0


    def number_of_test_marked_incomplete_events(self) -> int:
        return len(self.test_marked_incomplete_events)


    def has_test_skipped_events(self) -> bool:
        return len(self.test_skipped_events) > 0


    def number_of_test_skipped_events(self) -> int:
        return len(self.test_skipped_events)


    def has_test_passed_with_warning_events(self) -> bool:
        return len(self.test_passed_with_warning_events) > 0


    def number_of_test_passed_with_warning_events(self) -> int:
        return len(self.test_passed_with_warning_events)


    def was_successful_ignoring_warnings(self) -> bool:
        return not self.has_test_errored_events() and not self.has_test_failed_events()


    def was_successful(self) -> bool:
        return self.was_successful_ignoring_warnings() and not self.has_test_passed_with_warning_events()


    def was_successful_and_no_test_is_risky_or_skipped_or_incomplete(self) -> bool:
        if not self.was_successful():
            return False
        return not (self.has_test_considered_risky_events()
                    or self.has_test_marked_incomplete_events()
                    or self.has_test_skipped_events())


    def as_json(self) -> bytes:
        ret = msgspec.json.encode(self)
        ret = msgspec.json.format(ret, indent=4)
        return ret


    def save(self, filename: str) -> None:
        with open(filename, 'wb') as f:
            f.write(self.as_json())


    def write(self, fd: IO[str]) -> None:
        fd.write(self.as_json().decode('utf-8'))


    @staticmethod
    def load(filename: str) -> 'TestResult':
        """
        Read a file, and instantiate a TestResult from what we find.
        Raises msgspec.DecodeError if the file is not JSON, and msgspec.ValidationError
        if it is JSON but not a TestResult.
        """
        with open(filename, 'rb') as f:
            return msgspec.json.decode(f.read(), type=TestResult)


    def __str__(self):
        return f'TestResult({ self.number_of_tests_run } tests, { self.number_of_assertions } assertions)'
