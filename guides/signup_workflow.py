"""Example: a signup form that redirects into an address workflow."""

from stageflow import InMemoryContentDispatcher, StageflowConfig, WorkflowController


def check_name(output):
    if not output.get("name"):
        return False, "A name is required"
    return True, None


def needs_address(stage, next_stage, valid, values):
    # ask for an address right before the summary if none was given
    if next_stage == "Summary" and "street" not in values:
        return "Address(country=CA)"
    return None


def accept_address(values):
    return {"street": values.get("street", ""), "country": values.get("country", "")}


def main():
    dispatcher = InMemoryContentDispatcher()
    controller = WorkflowController(dispatcher, config=StageflowConfig())

    controller.register(
        "Signup",
        "Welcome;Form(name, :Your details);Summary(!name)",
        acceptor=lambda values: print(f"Signed up: {values.to_dict()}"),
        redirector=needs_address,
        validators=[None, check_name, None],
    )
    controller.register("Address", "Street(country)", acceptor=accept_address)

    controller.invoke("Signup(name=Bob)")
    dispatcher.complete({})
    dispatcher.complete({"name": ""})  # rejected, cancel prompt opens
    dispatcher.complete({"continue": True})  # back to the form
    dispatcher.complete({"name": "Bob"})  # redirected to Address
    dispatcher.complete({"street": "1 Main St", "country": "CA"})
    dispatcher.complete({})  # Summary

    for stage, arguments in dispatcher.activations:
        print(f"{stage}: {arguments}")


if __name__ == "__main__":
    main()
