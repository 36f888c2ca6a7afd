import asyncio
import sys


async def main(workflow_name: str, argv: list) -> int:
    """Main entry point for running workflows."""
    if workflow_name == "find_params":
        from workflows.find_params import run
        return await run(argv)

    print(f"Unknown workflow: {workflow_name}")
    return 1


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python main.py <workflow_name> [args...]")
        sys.exit(1)

    from dotenv import load_dotenv
    load_dotenv()

    workflow_name = sys.argv[1]
    sys.exit(asyncio.run(main(workflow_name, sys.argv[2:])))
