#
# Test the render command of the command-line tool
#

import logging
import sys

import pytest

from testrunreport.cli import find_commands, main
from testrunreport.testresult import TestResult

from sample_results import failed, skipped


def run_main(monkeypatch, *args: str) -> int:
    monkeypatch.setattr(sys, 'argv', [ 'testrunreport', *args ])
    with pytest.raises(SystemExit) as e:
        main()
    return e.value.code


@pytest.fixture
def failed_result_file(tmp_path) -> str:
    filename = str(tmp_path / 'failed.json')
    TestResult(2, 2, test_failed_events=[ failed() ], test_skipped_events=[ skipped('test_other') ]).save(filename)
    return filename


@pytest.fixture
def passed_result_file(tmp_path) -> str:
    filename = str(tmp_path / 'passed.json')
    TestResult(2, 5).save(filename)
    return filename


def test_commands_are_found():
    cmds = find_commands()

    assert 'render' in cmds
    assert 'version' in cmds


def test_render_passed(monkeypatch, capsys, passed_result_file: str):
    assert run_main(monkeypatch, 'render', '--in', passed_result_file) == 0
    assert capsys.readouterr().out == 'OK (2 tests, 5 assertions)\n'


def test_render_failed(monkeypatch, capsys, failed_result_file: str):
    assert run_main(monkeypatch, 'render', '--in', failed_result_file) == 1
    assert capsys.readouterr().out == (
            'There was 1 failure:\n'
            '\n1) FooTest::test_bar\nexpected true\n'
            '\nFAILURES!\n'
            'Tests: 2, Assertions: 2, Failures: 1, Skipped: 1.\n')


def test_render_options(monkeypatch, capsys, failed_result_file: str):
    assert run_main(monkeypatch, 'render', '--in', failed_result_file, '--display-skipped', '--colors', '--exit-zero') == 0

    out = capsys.readouterr().out
    assert 'There was 1 skipped test:\n\n1) FooTest::test_other\nnot today\n' in out
    assert '\x1b[37;41mFAILURES!\x1b[0m' in out


def test_render_to_file(monkeypatch, capsys, tmp_path, passed_result_file: str):
    out_file = tmp_path / 'report.txt'

    assert run_main(monkeypatch, 'render', '--in', passed_result_file, '--out', str(out_file)) == 0
    assert capsys.readouterr().out == ''
    assert out_file.read_text(encoding='utf8') == 'OK (2 tests, 5 assertions)\n'


def test_render_missing_file(monkeypatch, tmp_path):
    assert run_main(monkeypatch, 'render', '--in', str(tmp_path / 'does-not-exist.json')) == 255


def test_render_invalid_file(monkeypatch, tmp_path):
    bad = tmp_path / 'bad.json'
    bad.write_text('{ "number_of_tests_run": -3 }', encoding='utf-8')

    assert run_main(monkeypatch, 'render', '--in', str(bad)) == 255


def test_version(monkeypatch, capsys):
    assert run_main(monkeypatch, 'version') == 0
    assert capsys.readouterr().out.strip()


def test_render_malformed_json(monkeypatch, tmp_path):
    bad = tmp_path / 'bad.json'
    bad.write_text('not json at all', encoding='utf-8')

    assert run_main(monkeypatch, 'render', '--in', str(bad)) == 255


def test_render_warns_when_overwriting(monkeypatch, caplog, tmp_path, passed_result_file: str):
    out_file = tmp_path / 'report.txt'
    out_file.write_text('previous report\n', encoding='utf8')

    with caplog.at_level(logging.WARNING, logger='testrunreport'):
        assert run_main(monkeypatch, 'render', '--in', passed_result_file, '--out', str(out_file)) == 0

    assert f'Overwriting existing file { out_file }' in caplog.text
    assert out_file.read_text(encoding='utf8') == 'OK (2 tests, 5 assertions)\n'


def test_render_does_not_warn_for_new_file(monkeypatch, caplog, tmp_path, passed_result_file: str):
    with caplog.at_level(logging.WARNING, logger='testrunreport'):
        assert run_main(monkeypatch, 'render', '--in', passed_result_file, '--out', str(tmp_path / 'new.txt')) == 0

    assert 'Overwriting' not in caplog.text
