from rich.pretty import pprint

from voidable import *


class Patch(VoidableModel):
    name: str
    nickname: Maybe[str] = maybe_field()
    age: Maybe[int] = maybe_field()


if __name__ == '__main__':
    patch = Patch.model_validate_json('{"name": "Zed", "nickname": null}')
    pprint(patch)
    pprint(patch.model_dump_json())
