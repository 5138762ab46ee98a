# run_all.py
import asyncio
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parent


async def run_process(name: str, cmd: list) -> int:
    """
    Runs a subprocess and streams its logs to console. Returns the exit code.
    """
    print(f"▶ Starting {name}: {' '.join(cmd)}")

    process = await asyncio.create_subprocess_exec(
        *cmd,
        cwd=ROOT,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    async def _pipe_reader(stream, prefix):
        while True:
            line = await stream.readline()
            if not line:
                break
            print(f"[{prefix}] {line.decode().rstrip()}")

    await asyncio.gather(
        _pipe_reader(process.stdout, name),
        _pipe_reader(process.stderr, name),
    )
    return await process.wait()


async def main():
    # Apply migrations first, the app only starts on a current schema
    migrate_cmd = [sys.executable, "-m", "alembic", "upgrade", "head"]
    if await run_process("MIGRATE", migrate_cmd) != 0:
        sys.exit("Migrations failed")

    uvicorn_cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "salesdesk.main:app",
        "--reload",
        "--host", "0.0.0.0",
        "--port", "8000",
    ]
    await run_process("APP", uvicorn_cmd)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("Shutting down...")
