"""
Render the outcome of a finished test run as a text report.
"""

from testrunreport.printer import BufferingPrinter, FilePrinter, NullPrinter, Printer, StreamPrinter, StringPrinter
from testrunreport.resultprinter import ReportItem, ResultPrinter, ResultPrinterConfiguration, ResultPrinterError, render_result
from testrunreport.testresult import TestResult, TestResultError

__all__ = [
    'BufferingPrinter',
    'FilePrinter',
    'NullPrinter',
    'Printer',
    'ReportItem',
    'ResultPrinter',
    'ResultPrinterConfiguration',
    'ResultPrinterError',
    'StreamPrinter',
    'StringPrinter',
    'TestResult',
    'TestResultError',
    'render_result',
]
