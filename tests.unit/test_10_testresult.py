#
# Test the TestResult model: derived predicates, validation, and JSON persistence
#

import msgspec
import pytest

from testrunreport.testresult import BeforeFirstTestMethodErrored, OtherTest, TestMethod, TestResult, TestResultError, Throwable

from sample_results import errored, failed, incomplete, passed_with_warning, risky, skipped


def test_empty_result():
    result = TestResult()

    assert result.number_of_tests_run == 0
    assert not result.has_test_errored_events()
    assert not result.has_test_considered_risky_events()
    assert result.was_successful()
    assert result.was_successful_and_no_test_is_risky_or_skipped_or_incomplete()


def test_counts():
    result = TestResult(
            3,
            5,
            test_errored_events=[ errored() ],
            test_failed_events=[ failed('test_a'), failed('test_b') ],
            test_considered_risky_events=[ risky('test_a', 'one', 'two'), risky('test_b') ],
            test_skipped_events=[ skipped() ])

    assert result.number_of_test_errored_events() == 1
    assert result.number_of_test_failed_events() == 2
    assert result.number_of_tests_with_test_considered_risky_events() == 2
    assert result.number_of_test_considered_risky_events() == 3
    assert result.number_of_test_skipped_events() == 1
    assert result.number_of_test_marked_incomplete_events() == 0
    assert result.number_of_test_passed_with_warning_events() == 0


def test_success_predicates():
    assert not TestResult(1, 1, test_errored_events=[ errored() ]).was_successful_ignoring_warnings()
    assert not TestResult(1, 1, test_failed_events=[ failed() ]).was_successful_ignoring_warnings()

    with_warning = TestResult(1, 1, test_passed_with_warning_events=[ passed_with_warning() ])
    assert with_warning.was_successful_ignoring_warnings()
    assert not with_warning.was_successful()

    for caveat in [
        TestResult(1, 1, test_considered_risky_events=[ risky() ]),
        TestResult(1, 1, test_marked_incomplete_events=[ incomplete() ]),
        TestResult(1, 1, test_skipped_events=[ skipped() ])
    ]:
        assert caveat.was_successful()
        assert not caveat.was_successful_and_no_test_is_risky_or_skipped_or_incomplete()


def test_invalid_results():
    with pytest.raises(TestResultError):
        TestResult(-1, 0)
    with pytest.raises(TestResultError):
        TestResult(1, -1)
    with pytest.raises(TestResultError):
        TestResult(1, 1, test_considered_risky_events=[ [] ])


def test_test_identity():
    method = TestMethod('FooTest', 'test_bar', 'foo_test.py', 3)
    other = OtherTest('FooTest::setUpClass')

    assert method.is_test_method
    assert method.name_with_class == 'FooTest::test_bar'
    assert not other.is_test_method
    assert str(other) == 'FooTest::setUpClass'

    assert BeforeFirstTestMethodErrored('FooTest', Throwable('RuntimeError', 'x')).test == OtherTest('FooTest')


def test_throwable_as_string():
    assert Throwable('AssertionError', 'expected true').as_string() == 'AssertionError: expected true'
    assert Throwable('NotImplementedError', '').as_string() == 'NotImplementedError'
    assert Throwable('RuntimeError', 'boom', description='Custom text', stack_trace='a.py:1\nb.py:2').as_string() == 'Custom text\na.py:1\nb.py:2'

    chained = Throwable('RuntimeError', 'outer', previous=Throwable('KeyError', 'inner'))
    assert chained.as_string() == 'RuntimeError: outer\nCaused by\nKeyError: inner'


def test_throwable_from_exception():
    try:
        try:
            raise KeyError('inner')
        except KeyError as e:
            raise AssertionError('expected true') from e
    except AssertionError as e:
        throwable = Throwable.from_exception(e)

    assert throwable.class_name == 'AssertionError'
    assert throwable.message == 'expected true'
    assert throwable.as_string().startswith('AssertionError: expected true\n')
    assert 'test_10_testresult.py:' in throwable.stack_trace
    assert throwable.previous is not None
    assert throwable.previous.class_name == 'KeyError'


def test_save_and_load(tmp_path):
    result = TestResult(
            2,
            4,
            test_errored_events=[ BeforeFirstTestMethodErrored('FooTest', Throwable('RuntimeError', 'boom')), errored() ],
            test_considered_risky_events=[ risky('test_a', 'one', 'two') ])
    filename = str(tmp_path / 'result.json')

    result.save(filename)
    loaded = TestResult.load(filename)

    assert loaded == result
    assert isinstance(loaded.test_errored_events[0], BeforeFirstTestMethodErrored)


def test_load_handwritten_json(tmp_path):
    path = tmp_path / 'result.json'
    path.write_text("""{
    "number_of_tests_run": 1,
    "number_of_assertions": 1,
    "test_failed_events": [
        {
            "test": { "type": "method", "class_name": "FooTest", "method_name": "test_bar", "file": "foo.py", "line": 7 },
            "throwable": { "class_name": "AssertionError", "message": "expected true" }
        }
    ]
}""", encoding='utf-8')

    result = TestResult.load(str(path))

    assert result.number_of_test_failed_events() == 1
    assert result.test_failed_events[0].test == TestMethod('FooTest', 'test_bar', 'foo.py', 7)
    assert not result.was_successful()


def test_load_invalid_json(tmp_path):
    path = tmp_path / 'result.json'
    path.write_text('{ "number_of_tests_run": "many" }', encoding='utf-8')

    with pytest.raises(msgspec.ValidationError):
        TestResult.load(str(path))


def test_load_malformed_json(tmp_path):
    path = tmp_path / 'result.json'
    path.write_text('{ "number_of_tests_run": 1, ', encoding='utf-8')

    with pytest.raises(msgspec.DecodeError):
        TestResult.load(str(path))


def test_model_classes_are_not_collected_as_tests():
    for cls in [ TestMethod, TestResult ]:
        assert cls.__test__ is False
