from .demo import app

app(prog_name="docpager-demo")
