import questionary


def confirm_in_terminal(message: str) -> bool:
    """
    Ask a yes/no question on the terminal.
    An aborted prompt (Ctrl-C) counts as "no".
    """
    answer = questionary.confirm(message, default=False).ask()
    if answer is None:
        # User aborted
        return False
    return bool(answer)
