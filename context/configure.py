# Sample script for `jailbox collect` / `jailbox check`.
# Entry points: collect() and check(user_input). Only `bucket` can touch files,
# and only inside this directory.


def collect():
    items = []
    for name in bucket.list("inventory"):
        items.append(json.loads(bucket.read("inventory/" + name)))
    return {"count": len(items), "items": items}


def check(user_input):
    answer = user_input.strip()
    if not answer:
        return Err("input is empty")
    try:
        expected = bucket.read("answer.txt").strip()
    except NotFound:
        return Err("no answer configured")
    if answer != expected:
        log.info("wrong answer submitted")
        return Err("wrong answer")
    return Ok({"correct": True})
