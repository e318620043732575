import logging
import os

import structlog

from bincodec.conf import UNITTESTS_SETTINGS_FILEPATH

os.environ['BINCODEC_CONFIG_YAML'] = os.environ.get('BINCODEC_TEST_CONFIG_YAML', UNITTESTS_SETTINGS_FILEPATH)

structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING))
