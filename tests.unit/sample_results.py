"""
Building blocks for the TestResults used by the tests.
"""

from testrunreport.testresult import (
    BeforeFirstTestMethodErrored,
    OtherTest,
    TestConsideredRisky,
    TestErrored,
    TestFailed,
    TestMarkedIncomplete,
    TestMethod,
    TestPassedWithWarning,
    TestSkipped,
    Throwable,
)

TEST_FILE = '/src/tests/FooTest.py'


def method(method_name: str = 'test_bar', class_name: str = 'FooTest', line: int = 12) -> TestMethod:
    return TestMethod(class_name, method_name, TEST_FILE, line)


def errored(method_name: str = 'test_bar', message: str = 'boom') -> TestErrored:
    return TestErrored(method(method_name), Throwable('RuntimeError', message))


def errored_before_first_test(class_name: str = 'FooTest', message: str = 'boom') -> BeforeFirstTestMethodErrored:
    return BeforeFirstTestMethodErrored(class_name, Throwable('RuntimeError', message))


def failed(method_name: str = 'test_bar', message: str = 'expected true') -> TestFailed:
    return TestFailed(method(method_name), Throwable('AssertionError', message))


def risky(method_name: str = 'test_bar', *messages: str) -> list[TestConsideredRisky]:
    if not messages:
        messages = ( 'This test did not perform any assertions', )
    test = method(method_name)
    return [ TestConsideredRisky(test, m) for m in messages ]


def risky_other(name: str = 'FooTest::setUpClass', message: str = 'Output was printed') -> list[TestConsideredRisky]:
    return [ TestConsideredRisky(OtherTest(name), message) ]


def incomplete(method_name: str = 'test_bar', message: str = 'not done yet') -> TestMarkedIncomplete:
    return TestMarkedIncomplete(method(method_name), Throwable('IncompleteTestError', message))


def skipped(method_name: str = 'test_bar', message: str = 'not today') -> TestSkipped:
    return TestSkipped(method(method_name), message)


def passed_with_warning(method_name: str = 'test_bar', message: str = 'deprecated call') -> TestPassedWithWarning:
    return TestPassedWithWarning(method(method_name), message)
