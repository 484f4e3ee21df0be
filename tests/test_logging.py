"""Tests for logging utilities."""

import logging
from io import StringIO

import numpy as np

from iteropt import Executor, FunctionObjective, HagerZhangLineSearch
from iteropt.logging import configure_logging, get_logger, log_level, set_log_level


def test_get_logger_returns_namespaced_logger():
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "iteropt.test_module"


def test_get_logger_keeps_package_prefix():
    assert get_logger("iteropt.core.executor").name == "iteropt.core.executor"
    assert get_logger().name == "iteropt"
    assert get_logger("iteroptimizer").name == "iteropt.iteroptimizer"


def test_get_logger_caching():
    logger = get_logger("test_module")
    handler = next(h for h in logger.handlers if type(h) is logging.StreamHandler)
    assert get_logger("test_module") is logger
    own = [h for h in get_logger("test_module").handlers if type(h) is logging.StreamHandler]
    assert own == [handler]


def test_set_log_level_string():
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG
        set_log_level("ERROR")
        assert logger.level == logging.ERROR
        assert get_logger("test_module_created_later").level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_log_level_context_restores_previous_level():
    logger = get_logger("test_module")
    set_log_level(logging.WARNING)
    with log_level("DEBUG"):
        assert logger.level == logging.DEBUG
    assert logger.level == logging.WARNING


def test_configure_logging_redirects_output():
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        get_logger("test_module").debug("Debug message")
        get_logger("test_module_configured_first").info("Info message")
    finally:
        configure_logging(level=logging.WARNING)
    output = stream.getvalue()
    assert "[DEBUG] iteropt.test_module: Debug message" in output
    assert "[INFO] iteropt.test_module_configured_first: Info message" in output


def test_configure_logging_custom_format():
    stream = StringIO()
    try:
        configure_logging(level="INFO", format_string="%(levelname)s|%(message)s", stream=stream)
        get_logger("test_module").info("hello")
    finally:
        configure_logging(level=logging.WARNING)
    assert stream.getvalue().strip() == "INFO|hello"


def test_logger_does_not_propagate():
    assert get_logger("test_module").propagate is False


def test_executor_logs_run_summary():
    stream = StringIO()
    objective = FunctionObjective(
        fun=lambda x: float(x[0] ** 2),
        grad=lambda x: np.array([2.0 * x[0]]),
    )
    solver = HagerZhangLineSearch()
    solver.set_search_direction(np.array([-2.0]))
    try:
        configure_logging(level=logging.INFO, stream=stream)
        Executor(objective, solver).configure(
            lambda s: s.with_param(np.array([1.0])).with_max_iters(20)
        ).run()
    finally:
        configure_logging(level=logging.WARNING)
    output = stream.getvalue()
    assert "Running Hager-Zhang line search" in output
    assert "Line search condition met" in output
