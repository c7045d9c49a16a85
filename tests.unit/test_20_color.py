#
# Test the colorizing of text
#

from testrunreport.color import Colorizer, StatusColor, colorize, colorize_text_box


def test_colorize():
    assert colorize('black on yellow', 'No tests executed!') == '\x1b[30;43mNo tests executed!\x1b[0m'
    assert colorize('white on red', 'ERRORS!') == '\x1b[37;41mERRORS!\x1b[0m'


def test_colorize_leaves_whitespace_alone():
    assert colorize('black on green', '') == ''
    assert colorize('black on green', '  ') == '  '


def test_colorize_text_box_pads_lines():
    box = colorize_text_box('black on green', 'OK\nAll good')

    assert box == '\x1b[30;42mOK      \x1b[0m\n\x1b[30;42mAll good\x1b[0m'


def test_colorizer_disabled_is_identity():
    colorizer = Colorizer(False)

    for color in StatusColor:
        assert colorizer.colorize(color, 'FAILURES!') == 'FAILURES!'


def test_colorizer_enabled():
    colorizer = Colorizer(True)

    assert colorizer.colorize(StatusColor.SUCCESS, 'OK (1 test, 1 assertion)') == '\x1b[30;42mOK (1 test, 1 assertion)\x1b[0m'
    assert colorizer.colorize(StatusColor.ERROR, 'ERRORS!') == colorize('white on red', 'ERRORS!')
