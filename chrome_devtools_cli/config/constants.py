"""
Static configuration for the chrome-devtools CLI.

Companion server launch defaults and the catalogue of supported commands.
"""

from dataclasses import dataclass
from typing import Dict, List

DEFAULT_MCP_SERVER: Dict[str, object] = {
    "name": "chrome-devtools",
    "command": "npx",
    "args": ["-y", "chrome-devtools-mcp@latest"],
}

HEADLESS_FLAG = "--headless"
HEADLESS_SERVER_ARG = "--headless=true"

CLIENT_NAME = "chrome-devtools-cli-headless"
CLIENT_VERSION = "1"

SNAPSHOT_COMMAND = "take_snapshot"

# Commands that mutate page content and need a fresh a11y snapshot first
COMMANDS_REQUIRING_SNAPSHOT = frozenset({
    "click",
    "drag",
    "fill",
    "fill_form",
    "handle_dialog",
    "hover",
    "press_key",
    "upload_file",
})


@dataclass(frozen=True)
class CommandInfo:
    """Description of a single companion server tool."""
    name: str
    description: str
    parameters: str


_CATALOGUE: List[CommandInfo] = [
    CommandInfo(
        "click",
        "Clicks on the provided element",
        "uid (string, required): The uid of an element on the page from the page content snapshot\n"
        "dblClick (boolean, optional): Set to true for double clicks. Default is false.",
    ),
    CommandInfo(
        "close_page",
        "Closes the page by its index. The last open page cannot be closed.",
        "pageIdx (number, required): The index of the page to close. Call list_pages to list pages.",
    ),
    CommandInfo(
        "drag",
        "Drag an element onto another element",
        "from_uid (string, required): The uid of the element to drag\n"
        "to_uid (string, required): The uid of the element to drop into",
    ),
    CommandInfo(
        "emulate",
        "Emulates various features on the selected page.",
        "networkConditions (string, optional): Throttle network. Set to \"No emulation\" to disable.\n"
        "cpuThrottlingRate (number, optional): The CPU throttling rate, 1 to 20. Set to 1 to disable.",
    ),
    CommandInfo(
        "evaluate_script",
        "Evaluate a JavaScript function inside the currently selected page. "
        "Returns the response as JSON so returned values have to be JSON-serializable.",
        "function (string, required): A JavaScript function to run in the currently selected page\n"
        "args (array, optional): Optional list of arguments to pass to the function, as element uids",
    ),
    CommandInfo(
        "fill",
        "Type text into an input, text area or select an option from a <select> element.",
        "uid (string, required): The uid of an element on the page from the page content snapshot\n"
        "value (string, required): The value to fill in",
    ),
    CommandInfo(
        "fill_form",
        "Fill out multiple form elements at once",
        "elements (array, required): Elements from snapshot to fill out, each as {uid, value}",
    ),
    CommandInfo(
        "get_console_message",
        "Gets a console message by its ID. You can get all messages by calling list_console_messages.",
        "msgid (number, required): The msgid of a console message on the page",
    ),
    CommandInfo(
        "get_network_request",
        "Gets a network request by its ID. You can get all requests by calling list_network_requests.",
        "reqid (number, required): The reqid of a network request on the page",
    ),
    CommandInfo(
        "handle_dialog",
        "If a browser dialog was opened, use this command to handle it",
        "action (string, required): Whether to dismiss or accept the dialog (accept | dismiss)\n"
        "promptText (string, optional): Optional prompt text to enter into the dialog.",
    ),
    CommandInfo(
        "hover",
        "Hover over the provided element",
        "uid (string, required): The uid of an element on the page from the page content snapshot",
    ),
    CommandInfo(
        "list_console_messages",
        "List all console messages for the currently selected page since the last navigation.",
        "pageSize (number, optional): Maximum number of messages to return\n"
        "pageIdx (number, optional): Page number to return (0-based)\n"
        "types (array, optional): Filter messages to only return messages of the specified types",
    ),
    CommandInfo(
        "list_network_requests",
        "List all requests for the currently selected page since the last navigation.",
        "pageSize (number, optional): Maximum number of requests to return\n"
        "pageIdx (number, optional): Page number to return (0-based)\n"
        "resourceTypes (array, optional): Filter requests to only return requests of the specified resource types",
    ),
    CommandInfo(
        "list_pages",
        "Get a list of pages open in the browser.",
        "",
    ),
    CommandInfo(
        "navigate_page",
        "Navigates the currently selected page to a URL.",
        "url (string, required): URL to navigate the page to\n"
        "timeout (integer, optional): Maximum wait time in milliseconds. If set to 0, the default timeout will be used.",
    ),
    CommandInfo(
        "new_page",
        "Creates a new page",
        "url (string, required): URL to load in a new page\n"
        "timeout (integer, optional): Maximum wait time in milliseconds. If set to 0, the default timeout will be used.",
    ),
    CommandInfo(
        "performance_analyze_insight",
        "Provides more detailed information on a specific Performance Insight "
        "that was highlighted in the results of a trace recording.",
        "insightName (string, required): The name of the Insight you want more information on, "
        "for example \"DocumentLatency\" or \"LCPBreakdown\"",
    ),
    CommandInfo(
        "performance_start_trace",
        "Starts a performance trace recording on the selected page. "
        "This can be used to look for performance problems and insights to improve the performance of the page.",
        "reload (boolean, required): Determines if, once tracing has started, the page should be automatically reloaded\n"
        "autoStop (boolean, required): Determines if the trace recording should be automatically stopped",
    ),
    CommandInfo(
        "performance_stop_trace",
        "Stops the active performance trace recording on the selected page.",
        "",
    ),
    CommandInfo(
        "press_key",
        "Press a key or key combination. Use this when other input methods like fill() cannot be used.",
        "key (string, required): A key or a combination (e.g., \"Enter\", \"Control+A\", \"Control+Shift+R\")",
    ),
    CommandInfo(
        "resize_page",
        "Resizes the selected page's window so that the page has specified dimension",
        "width (number, required): Page width\n"
        "height (number, required): Page height",
    ),
    CommandInfo(
        "select_page",
        "Select a page as a context for future tool calls.",
        "pageIdx (number, required): The index of the page to select. Call list_pages to list pages.",
    ),
    CommandInfo(
        "take_screenshot",
        "Take a screenshot of the page or element.",
        "format (string, optional): Type of format to save the screenshot as (png | jpeg | webp)\n"
        "quality (number, optional): Compression quality for JPEG and WebP formats (0-100)\n"
        "uid (string, optional): The uid of an element on the page from the page content snapshot\n"
        "fullPage (boolean, optional): If set to true takes a screenshot of the full page instead of the viewport\n"
        "filePath (string, optional): The absolute path to save the screenshot to instead of attaching it",
    ),
    CommandInfo(
        "take_snapshot",
        "Take a text snapshot of the currently selected page based on the a11y tree. "
        "The snapshot lists page elements along with a unique identifier (uid).",
        "verbose (boolean, optional): Whether to include all possible information available in the full a11y tree\n"
        "filePath (string, optional): The absolute path to save the snapshot to instead of attaching it",
    ),
    CommandInfo(
        "upload_file",
        "Upload a file through a provided element.",
        "uid (string, required): The uid of the file input element or an element that will open a file chooser\n"
        "filePath (string, required): The local path of the file to upload",
    ),
    CommandInfo(
        "wait_for",
        "Wait for the specified text to appear on the selected page.",
        "text (string, required): Text to appear on the page\n"
        "timeout (integer, optional): Maximum wait time in milliseconds. If set to 0, the default timeout will be used.",
    ),
]

COMMANDS: List[str] = [info.name for info in _CATALOGUE]
COMMANDS_INFO: List[str] = [info.description for info in _CATALOGUE]
COMMANDS_DETAIL: List[str] = [info.parameters for info in _CATALOGUE]
COMMAND_CATALOGUE: Dict[str, CommandInfo] = {info.name: info for info in _CATALOGUE}
