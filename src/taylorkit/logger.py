"""Contains the name for the logger of taylorkit modules.

``taylorkit`` uses a simple logging system based on the
`Logging <https://docs.python.org/3/library/logging.html>`__ standard library.
Tower arithmetic only emits ``DEBUG`` messages, e.g. when repeated
perturbation accumulates into an existing derivative or when a derivative is
requested beyond the order a tower carries.

By default nothing below ``WARNING`` is displayed.

Calling applications can configure the format and log level of the displayed messages
by `Configuring Logging <https://docs.python.org/3/howto/logging.html#configuring-logging>`__
for ``taylorkit.logger.taylorkit_logger``, e.g.::

    >>> import logging
    >>> logging.basicConfig(
    ...     level=logging.DEBUG,
    ...     format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    ... )
"""
import logging

logger_name = "taylorkit"
taylorkit_logger = logging.getLogger(logger_name)
