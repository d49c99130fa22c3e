class GreetingService:
    """Builds the text returned by /hello/greeting/{name}."""

    def greeting(self, name: str) -> str:
        return f"hello {name}"
