import azure.functions as func

from filmorate_service.blueprints import films_blueprint, reviews_blueprint, users_blueprint

app = func.FunctionApp()

app.register_blueprint(users_blueprint)
app.register_blueprint(films_blueprint)
app.register_blueprint(reviews_blueprint)
