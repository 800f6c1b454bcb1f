import sys

from tool_result_view.cli import main

sys.exit(main())
