import os
import sys

# Keep tests away from a developer's real memory file
os.environ.setdefault("AGENT_MEMORY_STORAGE_BACKEND", "in_memory")

# Add src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))
