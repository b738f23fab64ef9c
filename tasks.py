from invoke import task


@task
def lint(c):
    c.run("ruff check .")


@task
def format_check(c):
    c.run("ruff format --check .")


@task
def test(c):
    c.run("pytest")


@task
def standings(c, snapshot="data/restaurants.json"):
    c.run(f"pizza-standings build --snapshot {snapshot} --no-save")


@task
def ci(c):
    lint(c)
    format_check(c)
    test(c)
