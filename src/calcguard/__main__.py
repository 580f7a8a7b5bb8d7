from calcguard.main import app

app(prog_name="calcguard")
