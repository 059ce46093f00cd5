from rich.pretty import pprint

from nflag import shell

registry = shell.create(description="Greets someone, possibly several times.")
registry.register("name", type="string", default="world", descr="Who to greet")
registry.register("times", type="int", required=True, descr="How many greetings")
registry.register("ratio", type="float64", default=0.5, descr="Share of greetings in upper case")
registry.register("verbose", descr="Print the resolved flags")


if __name__ == '__main__':
    shell.invoke(registry)
    if registry.get_as_bool("verbose"):
        pprint({name: registry.get(name) for name in registry})
