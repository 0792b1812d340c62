"""
Help Manager

Serves the help and usage example text shipped under the package's help/
directory.
"""

from pathlib import Path
from typing import List, Optional

HELP_FILE_SUFFIX = "_help.txt"


class HelpManager:
    """Looks up help topics by command name"""

    def __init__(self, help_dir: Optional[Path] = None):
        self.help_dir = help_dir or Path(__file__).parent.parent / "help"

    def _topic_file(self, topic: str) -> Path:
        # Commands use dashes, help files use underscores
        return self.help_dir / f"{topic.replace('-', '_')}{HELP_FILE_SUFFIX}"

    def available_topics(self) -> List[str]:
        """Help topics present on disk, sorted"""
        return sorted(path.name[:-len(HELP_FILE_SUFFIX)] for path in self.help_dir.glob(f"*{HELP_FILE_SUFFIX}"))

    def get_help(self, topic: str) -> str:
        """Get help text for a topic, or a pointer to the known topics"""
        help_file = self._topic_file(topic)
        if help_file.is_file():
            return help_file.read_text()
        return f"No help available for '{topic}'. Available topics: {', '.join(self.available_topics())}"

    def get_main_help(self) -> str:
        return self.get_help("main")

    def get_examples(self, command: str) -> str:
        """Get usage examples for a command such as 'check' or 'generate-config'"""
        return self.get_help(f"{command}_examples")

    def show_help(self, topic: Optional[str] = None) -> None:
        """Print help for a topic, or the main help"""
        print(self.get_main_help() if topic is None else self.get_help(topic))

    def show_examples(self, command: str) -> None:
        print(self.get_examples(command))
