"""Agent use — TemplateKit as a standalone LangChain toolkit.

Bind ``kit.get_tools()`` to any chat model; here the tools are invoked
directly to show what the model would receive.
"""

from pathlib import Path

from langchain_templatekit import TemplateKit

TEMPLATES = Path(__file__).parent / "Templates"

kit = TemplateKit(str(TEMPLATES))
template_tool, inspect_tool = kit.get_tools()

if __name__ == "__main__":
    print(template_tool.description)
    print()
    print(inspect_tool.invoke({"template_name": "meeting"}))
    print()
    print(template_tool.invoke({"template_name": "meeting", "title": "Weekly sync"}))
