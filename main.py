import asyncio

from helmsman import Registry, command, dispatch

__prog__ = "helmsman-demo"


@command
def add(a: int, b: int = 2):
    """add two integers"""
    print(f"result: {a + b}")


@command
def div(a: float, b: float):
    """divide two numbers"""
    print(f"result: {a / b}")


@command("sleep")
async def nap(seconds: float = 0.5, *, loud: bool = False):
    await asyncio.sleep(seconds)
    print("awake!" if loud else "awake")


def test(a: int, g3: bool, t: str):
    print(f"this is the test..\n 'a' having the value of {a}\n 'g3' having the value of {g3}\n 't' having the value of {t}..")


if __name__ == '__main__':
    registry = Registry()
    registry.include(__name__)
    registry.register("test", test)
    dispatch(registry)
