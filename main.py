from weather_meme import create_app

app = create_app()

if __name__ == '__main__':
    app.logger.info(f"Backend starting on port {app.config['PORT']}")
    app.run(host='0.0.0.0', port=app.config['PORT'], debug=True)
