"""Run the agent-metrics CLI over call-center interaction exports."""

from dotenv import load_dotenv

from agent_metrics.cli import app

# AGENT_METRICS_SORT_BY and AGENT_METRICS_OUTPUT_DIR may come from a .env file
load_dotenv()

if __name__ == "__main__":
    app()
