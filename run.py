import os

from ipay_africa import create_app
from ipay_africa.config import DevelopmentConfig, ProductionConfig

app = create_app(DevelopmentConfig if os.getenv('FLASK_DEBUG', '1') == '1' else ProductionConfig)


def main():
    app.run(
        host=os.getenv('FLASK_RUN_HOST', '0.0.0.0'),
        port=int(os.getenv('PORT', os.getenv('FLASK_RUN_PORT', 9000))),
        debug=app.config.get('DEBUG', False)
    )


if __name__ == '__main__':
    main()
