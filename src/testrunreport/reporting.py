"""
Reporting functionality: diagnostic logging for the report renderer and its command-line tool.
The rendered report itself never goes through here; it goes to a Printer.
"""

import logging
import logging.config
import sys
import traceback

logging.config.dictConfig({
    'version'                  : 1,
    'disable_existing_loggers' : False,
    'formatters'               : {
        'standard' : {
            'format' : '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            'datefmt' : '%Y-%m-%dT%H:%M:%SZ'
        },
    },
    'handlers' : {
        'default' : {
            'level'     : 'DEBUG',
            'formatter' : 'standard',
            'class'     : 'logging.StreamHandler',
            'stream'    : 'ext://sys.stderr'
        }
    },
    'loggers' : {
        '' : { # root logger -- set level to most output that can happen
            'handlers'  : [ 'default' ],
            'level'     : 'WARNING',
            'propagate' : True
        }
    }
})
LOG = logging.getLogger( 'testrunreport' )

def set_reporting_level(n_verbose_flags: int) :
    if n_verbose_flags == 1:
        LOG.setLevel(logging.INFO)
    elif n_verbose_flags >= 2:
        LOG.setLevel(logging.DEBUG)


def trace(*args):
    """
    Emit a trace message.

    args: the message or message components
    """
    if LOG.isEnabledFor(logging.DEBUG):
        LOG.debug(_construct_msg(True, False, args))


def is_trace_active() :
    """
    Is trace logging on?

    return: True or False
    """
    return LOG.isEnabledFor(logging.DEBUG)


def info(*args):
    """
    Emit an info message.

    args: msg: the message or message components
    """
    if LOG.isEnabledFor(logging.INFO):
        LOG.info(_construct_msg(False, False, args))


def is_info_active():
    return LOG.isEnabledFor(logging.INFO)


def warning(*args):
    """
    Emit a warning message.

    args: the message or message components
    """
    if LOG.isEnabledFor(logging.WARNING):
        LOG.warning(_construct_msg(False, LOG.isEnabledFor(logging.DEBUG), args))


def fatal(*args):
    """
    Emit a fatal error message and exit with code 255.

    args: the message or message components
    """
    if args:
        if LOG.isEnabledFor(logging.CRITICAL):
            LOG.critical(_construct_msg(False, LOG.isEnabledFor(logging.DEBUG), args))

    raise SystemExit(255) # Don't call exit() because that will close stdin


def _construct_msg(with_loc, with_tb, args):
    """
    Construct a message from these arguments.

    with_loc: prefix the message with the location of the caller of the logging function
    with_tb: append the traceback if an exception is the last argument
    args: tuple of message components
    return: string message
    """
    if with_loc:
        frame = sys._getframe(2) # pylint: disable=protected-access
        ret = f'{ frame.f_code.co_filename }#{ frame.f_lineno } { frame.f_code.co_name }: '
    else:
        ret = ''

    def m(a):
        """
        Formats one argument into something suitable for log messages.
        """
        if a is None:
            return '<undef>'
        if callable(a):
            return str(a)
        if isinstance(a, OSError):
            return type(a).__name__ + ' ' + str(a)
        return a

    ret += ' '.join(map(str, map(m, args)))

    if with_tb and len(args) > 0:
        last = args[-1]
        if isinstance(last, Exception):
            ret += '\n' + ''.join(traceback.format_exception(type(last), last, last.__traceback__))

    return ret
